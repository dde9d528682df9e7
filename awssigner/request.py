"""
The view of an HTTP request that the signer reads and annotates.
"""

from collections import OrderedDict
from collections.abc import Mapping, MutableMapping
from urllib.parse import unquote, urlsplit

from .exc import MalformedRequestError

# Ports implied by the scheme; these are omitted from the Host header.
_default_ports = {"http": 80, "https": 443}

class Headers(MutableMapping):
    """
    An ordered mapping of HTTP header names to values with case-insensitive
    lookup. The spelling of a name is kept from when it was first set.
    """

    def __init__(self, data=None, **kw):
        super(Headers, self).__init__()
        self._store = OrderedDict()
        if data is None:
            data = {}
        self.update(data, **kw)
        return

    def __setitem__(self, key, value):
        if not isinstance(key, str):
            raise TypeError("Header name must be a string: %r" % (key,))

        if not isinstance(value, str):
            raise TypeError(
                "Header %r value must be a string: %r" %
                (key, type(value).__name__))

        existing = self._store.get(key.lower())
        name = existing[0] if existing is not None else key
        self._store[key.lower()] = (name, value)

    def __getitem__(self, key):
        return self._store[key.lower()][1]

    def __delitem__(self, key):
        del self._store[key.lower()]

    def __iter__(self):
        return (name for name, _ in self._store.values())

    def __len__(self):
        return len(self._store)

    def __eq__(self, other):
        if not isinstance(other, Mapping):
            return NotImplemented
        try:
            other = Headers(other)
        except TypeError:
            return False
        return dict(self.lower_items()) == dict(other.lower_items())

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, dict(self.items()))

    def lower_items(self):
        """
        Iterate over (lower-cased name, value) pairs.
        """
        return ((key, value) for key, (_, value) in self._store.items())

    def copy(self):
        return Headers(self._store.values())


class SignableRequest(object):
    """
    The parts of an HTTP request covered by a SigV4 signature.

    SignableRequest(
        method: str="GET",
        host: Optional[str]=None,
        path: str="/",
        query: str="",
        headers: Mapping[str, str]={},
        body: Optional[bytes]=None)

    path is the decoded path; it is percent-encoded during canonicalization.
    query is the raw query string and is signed exactly as given.
    """

    def __init__(self, method="GET", host=None, path="/", query="",
                 headers=None, body=None):
        super(SignableRequest, self).__init__()
        self.method = method
        self.host = host
        self.path = path
        self.query = query
        self.headers = headers if headers is not None else {}
        self.body = body
        return

    @classmethod
    def from_url(cls, url, method="GET", headers=None, body=None):
        """
        SignableRequest.from_url(url, method="GET", headers=None, body=None)
            -> SignableRequest

        Build a request from an absolute URL. The host keeps any non-default
        port; the path is percent-decoded; the query is kept verbatim.
        """
        parts = urlsplit(url)
        host = parts.netloc.rpartition("@")[2] or None

        try:
            port = parts.port
        except ValueError as e:
            raise MalformedRequestError("Invalid port in URL: %s" % e)

        if host is not None and port is not None:
            if _default_ports.get(parts.scheme.lower()) == port:
                host = host.rsplit(":", 1)[0]

        return cls(method=method, host=host, path=unquote(parts.path),
                   query=parts.query, headers=headers, body=body)

    @property
    def method(self):
        """
        The HTTP method (GET, POST, PUT) used to make the request.
        """
        return self._method

    @method.setter
    def method(self, value):
        if value is not None and not isinstance(value, str):
            raise TypeError("Expected method to be a string.")

        self._method = value
        return

    @property
    def host(self):
        """
        The authority the request is sent to, or None if unknown.
        """
        return self._host

    @host.setter
    def host(self, value):
        if value is not None and not isinstance(value, str):
            raise TypeError("Expected host to be a string.")

        self._host = value
        return

    @property
    def path(self):
        """
        The decoded path component of the URI.
        """
        return self._path

    @path.setter
    def path(self, value):
        if value is not None and not isinstance(value, str):
            raise TypeError("Expected path to be a string.")

        self._path = value
        return

    @property
    def query(self):
        """
        The raw query string portion of the URI.
        """
        return self._query

    @query.setter
    def query(self, value):
        if value is not None and not isinstance(value, str):
            raise TypeError("Expected query to be a string.")

        self._query = value
        return

    @property
    def headers(self):
        """
        The HTTP headers of the request.
        """
        return self._headers

    @headers.setter
    def headers(self, value):
        if not isinstance(value, Mapping):
            raise TypeError("Expected headers to be a mapping.")

        self._headers = Headers(value)
        return

    @property
    def body(self):
        """
        The request body, or None if there is none.
        """
        return self._body

    @body.setter
    def body(self, value):
        if value is not None:
            if not isinstance(value, (bytes, bytearray)):
                raise TypeError("Expected body to be a byte array.")
            value = bytes(value)

        self._body = value
        return

    def signed(self, service, region, access_key_id, secret_access_key,
               timestamp=None):
        """
        Return a signed copy of this request. Do not change the returned
        request afterwards; the signature only covers its current contents.
        """
        from .sigv4 import Credentials, Signer

        signer = Signer(Credentials(access_key_id, secret_access_key), region,
                        service)
        return signer.sign(self, timestamp=timestamp)

    def __repr__(self):
        return ("%s(method=%r, host=%r, path=%r, query=%r, headers=%r)" % (
            type(self).__name__, self.method, self.host, self.path,
            self.query, self.headers))

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
