"""
SigV4 signing routines.
"""

from collections import namedtuple
from copy import deepcopy
from enum import Enum
from hashlib import sha256
import hmac
from io import BytesIO
from logging import getLogger
from string import ascii_letters, digits

from .dateutil import amz_date, datestamp, to_utc
from .exc import ConfigurationError, MalformedRequestError
from .request import SignableRequest

# pylint: disable=C0103

# Algorithm for AWS SigV4
AWS4_HMAC_SHA256 = "AWS4-HMAC-SHA256"

# Unreserved bytes from RFC 3986.
_rfc3986_unreserved = frozenset((ascii_letters + digits + "-._~")
                                .encode("utf-8"))

# Header names
_authorization = "Authorization"
_host = "Host"
_x_amz_date = "X-Amz-Date"

_aws4_request = "aws4_request"

# Headers covered by every signature: lower-cased and sorted.
SIGNED_HEADERS = tuple(sorted(
    name.lower() for name in (_host, _x_amz_date, "Content-Type")))

# SHA-256 digest of an empty string
EMPTY_SHA256_HASH = (
    "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855")

# Logging instance
log = getLogger("awssigner.sigv4")


class Service(Enum):
    """
    Well-known AWS services. Use OtherService for anything not listed.
    """
    S3 = "s3"
    ES = "es"
    IAM = "iam"

    def __str__(self):
        return self.value


class OtherService(namedtuple("OtherService", ["name"])):
    """
    An AWS service without a Service member, e.g. OtherService("ec2").
    """
    __slots__ = ()

    @property
    def value(self):
        """
        The short code used in the credential scope.
        """
        return self.name.lower()

    def __str__(self):
        return self.value


def resolve_service(service):
    """
    resolve_service(service) -> Service | OtherService

    Convert a service name into a Service member when it is well known, or an
    OtherService otherwise. Service and OtherService values are returned
    unchanged.

    A ConfigurationError exception is raised if the name is empty.
    """
    if isinstance(service, (Service, OtherService)):
        if not service.value:
            raise ConfigurationError("Service name cannot be empty.")
        return service

    if not isinstance(service, str):
        raise TypeError("Expected service to be a string: %r" %
                        type(service).__name__)

    if not service:
        raise ConfigurationError("Service name cannot be empty.")

    try:
        return Service(service.lower())
    except ValueError:
        return OtherService(service)


class Credentials(namedtuple("Credentials",
                             ["access_key_id", "secret_access_key"])):
    """
    An AWS access key id and secret access key pair.
    """
    __slots__ = ()

    def __repr__(self):
        return "Credentials(access_key_id=%r, secret_access_key='****')" % (
            self.access_key_id,)


SigningScope = namedtuple("SigningScope", ["region", "service"])


def uri_encode(value):
    """
    uri_encode(value) -> str

    Percent-encode every byte of the UTF-8 form of value except the RFC 3986
    unreserved characters (alpha, digit, '-', '.', '_', '~'). A literal '%' is
    encoded as %25, so encoding twice escapes the first encoding.
    """
    result = BytesIO()

    for c in value.encode("utf-8"):
        if c in _rfc3986_unreserved:
            result.write(bytes((c,)))
        else:
            result.write(("%%%02X" % c).encode("ascii"))

    return result.getvalue().decode("ascii")


def canonical_uri_path(uri_path, service):
    """
    canonical_uri_path(uri_path, service) -> str

    Encode the decoded path of a request for the canonical request. Empty
    segments are dropped. A '..' segment is dropped together with the segment
    just before it; runs of '..' are not resolved further. Segments are
    encoded twice for every service except S3. A non-empty result ends with
    '/'.
    """
    if not uri_path:
        return "/"

    double_encode = resolve_service(service) is not Service.S3
    segments = [el for el in uri_path.split("/") if el]
    kept = []

    for i, segment in enumerate(segments):
        if segment == ".." or (
                i + 1 < len(segments) and segments[i + 1] == ".."):
            continue

        encoded = uri_encode(segment)
        if double_encode:
            encoded = uri_encode(encoded)
        kept.append(encoded)

    if not kept:
        return "/"

    return "/" + "/".join(kept) + "/"


def canonical_headers(headers, signed_headers=SIGNED_HEADERS):
    """
    The header block of the canonical request, one "name:value" line per
    signed header present on the request, including the trailing newline.
    """
    lines = []
    for name in signed_headers:
        value = headers.get(name)
        if value is None:
            continue
        lines.append("%s:%s\n" % (name.lower(), " ".join(value.split())))

    return "".join(lines)


def payload_hash(body):
    """
    Lower-case hex SHA-256 of the body, or of the empty string if there is
    no body.
    """
    if body is None:
        return EMPTY_SHA256_HASH
    return sha256(body).hexdigest()


def canonical_request(request, service, signed_headers=SIGNED_HEADERS):
    """
    canonical_request(request, service, signed_headers=SIGNED_HEADERS) -> str

    The AWS SigV4 canonical request for a SignableRequest:
        request_method + '\n' +
        canonical_uri_path + '\n' +
        query_string + '\n' +
        canonical_headers + '\n' +
        signed_header_names + '\n' +
        sha256(body).hexdigest()

    The query string is passed through as given.
    """
    return ((request.method or "GET").upper() + "\n" +
            canonical_uri_path(request.path, service) + "\n" +
            (request.query or "") + "\n" +
            canonical_headers(request.headers, signed_headers) + "\n" +
            ";".join(signed_headers) + "\n" +
            payload_hash(request.body))


def credential_scope(date, region, service):
    """
    The scope binding a signature to a date, region and service.
    """
    return "%s/%s/%s/%s" % (date, region, service, _aws4_request)


def string_to_sign(timestamp, scope, canonical_req):
    """
    The AWS SigV4 string being signed.
    """
    return (AWS4_HMAC_SHA256 + "\n" +
            timestamp + "\n" +
            scope + "\n" +
            sha256(canonical_req.encode("utf-8")).hexdigest())


def hmac_sha256(key, data):
    """
    hmac_sha256(key, data) -> bytes

    HMAC-SHA256 of the UTF-8 form of data. key must be raw bytes, never a
    hex or base64 rendering of them.
    """
    if not isinstance(key, (bytes, bytearray)):
        raise TypeError("Expected HMAC key to be bytes: %r" %
                        type(key).__name__)

    return hmac.new(key, data.encode("utf-8"), sha256).digest()


def derive_signing_key(secret_access_key, date, region, service):
    """
    derive_signing_key(secret_access_key, date, region, service) -> bytes

    DateKey              = HMAC-SHA256("AWS4"+"<SecretAccessKey>", "<YYYYMMDD>")
    DateRegionKey        = HMAC-SHA256(<DateKey>, "<aws-region>")
    DateRegionServiceKey = HMAC-SHA256(<DateRegionKey>, "<aws-service>")
    SigningKey           = HMAC-SHA256(<DateRegionServiceKey>, "aws4_request")
    """
    k_secret = b"AWS4" + secret_access_key.encode("utf-8")
    k_date = hmac_sha256(k_secret, date)
    k_region = hmac_sha256(k_date, region)
    k_service = hmac_sha256(k_region, str(service))
    return hmac_sha256(k_service, _aws4_request)


def signature_hex(signing_key, to_sign):
    """
    The lower-case hex signature of the string to sign.
    """
    return hmac_sha256(signing_key, to_sign).hex()


def authorization_header(access_key_id, scope, signed_headers, signature):
    """
    The value of the Authorization header.
    """
    return "%s Credential=%s/%s, SignedHeaders=%s, Signature=%s" % (
        AWS4_HMAC_SHA256, access_key_id, scope, ";".join(signed_headers),
        signature)


def sign_request(request, scope, credentials, timestamp=None):
    """
    sign_request(request, scope, credentials, timestamp=None)
        -> SignableRequest

    Sign a copy of request for scope (a SigningScope) with credentials and
    return it; request itself is left unchanged. timestamp may be a datetime
    or an ISO 8601 string; when omitted the current time is used.

    The copy gains Host (when not already present), X-Amz-Date and
    Authorization headers. Do not change the returned request afterwards;
    the signature only covers its current contents.
    """
    _validate_credentials(credentials)
    region = _validate_region(scope.region)
    service = resolve_service(scope.service)

    if not isinstance(request, SignableRequest):
        raise TypeError("Expected request to be a SignableRequest: %r" %
                        type(request).__name__)

    if not _has_host_header(request.headers) and not request.host:
        raise MalformedRequestError(
            "Request has no Host header and no host to derive one from.")

    # One instant feeds both the header and the credential scope.
    instant = to_utc(timestamp)

    signed = deepcopy(request)
    if not _has_host_header(signed.headers):
        signed.headers[_host] = signed.host

    signed.headers[_x_amz_date] = amz_date(instant)

    canonical_req = canonical_request(signed, service)
    log.debug("CanonicalRequest:\n%s", canonical_req)

    day = datestamp(instant)
    scope_str = credential_scope(day, region, service)
    to_sign = string_to_sign(signed.headers[_x_amz_date], scope_str,
                             canonical_req)
    log.debug("StringToSign:\n%s", to_sign)

    signing_key = derive_signing_key(
        credentials.secret_access_key, day, region, service)
    signature = signature_hex(signing_key, to_sign)

    signed.headers[_authorization] = authorization_header(
        credentials.access_key_id, scope_str, SIGNED_HEADERS, signature)
    return signed


def _has_host_header(headers):
    return bool((headers.get(_host) or "").strip())


def _validate_credentials(credentials):
    if not isinstance(credentials, Credentials):
        raise TypeError("Expected credentials to be Credentials: %r" %
                        type(credentials).__name__)

    if not credentials.access_key_id:
        raise ConfigurationError("Access key id cannot be empty.")

    if not credentials.secret_access_key:
        raise ConfigurationError("Secret access key cannot be empty.")


def _validate_region(region):
    if not isinstance(region, str) or not region:
        raise ConfigurationError("Region cannot be empty.")
    return region


class Signer(object):
    """
    Sign requests with one set of credentials for one region.

    Signer(credentials: Credentials, region: str, service=None)

    service is the default service for sign(); it can be a Service, an
    OtherService or a service name string, and may be overridden on each
    call. A Signer holds no mutable state and may be shared between threads.
    """

    def __init__(self, credentials, region, service=None):
        super(Signer, self).__init__()
        _validate_credentials(credentials)
        self._credentials = credentials
        self._region = _validate_region(region)
        self._service = (resolve_service(service)
                         if service is not None else None)
        return

    @classmethod
    def from_environment(cls, service=None, environ=None):
        """
        Create a Signer from the AWS_* credential and region variables.
        """
        from .config import resolve_credentials, resolve_region

        return cls(resolve_credentials(environ), resolve_region(environ),
                   service)

    @property
    def credentials(self):
        """
        The credentials used for signing.
        """
        return self._credentials

    @property
    def region(self):
        """
        The region requests are signed for.
        """
        return self._region

    @property
    def service(self):
        """
        The default service requests are signed for, or None.
        """
        return self._service

    def scope(self, service=None):
        """
        The SigningScope for service, falling back to the default service.
        """
        if service is None:
            service = self._service
            if service is None:
                raise ConfigurationError(
                    "No service given to sign for and no default service.")

        return SigningScope(self._region, resolve_service(service))

    def sign(self, request, timestamp=None, service=None):
        """
        Return a signed copy of request. See sign_request().
        """
        return sign_request(request, self.scope(service), self._credentials,
                            timestamp)

    def signing_key(self, timestamp, service=None):
        """
        The derived signing key for the date of timestamp.
        """
        scope = self.scope(service)
        return derive_signing_key(
            self._credentials.secret_access_key,
            datestamp(timestamp), scope.region,
            scope.service)

    def __repr__(self):
        return "Signer(credentials=%r, region=%r, service=%r)" % (
            self._credentials, self._region, self._service)

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
