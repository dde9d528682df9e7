"""
Resolve credentials and region from environment variables.

The signing routines never read the environment themselves; these helpers
are for callers that keep their configuration there.
"""

from logging import getLogger
from os import environ as os_environ

from .exc import ConfigurationError
from .sigv4 import Credentials

# Variable names in order of preference. The run-together names are the
# ones used by the Info.plist based configuration of earlier releases.
ACCESS_KEY_ID_VARIABLES = ("AWS_ACCESS_KEY_ID", "AWS_ACCESSKEYID")
SECRET_ACCESS_KEY_VARIABLES = ("AWS_SECRET_ACCESS_KEY", "AWS_SECRETACCESSKEY")
REGION_VARIABLES = ("AWS_REGION", "AWS_DEFAULT_REGION")

log = getLogger("awssigner.config")

def _lookup(environ, names):
    if environ is None:
        environ = os_environ

    for name in names:
        value = environ.get(name)
        if value:
            log.debug("Using %s from the environment", name)
            return value

    raise ConfigurationError(
        "None of %s is set in the environment" % ", ".join(names))

def resolve_credentials(environ=None):
    """
    resolve_credentials(environ=None) -> Credentials

    Read the access key id and secret access key from environ (os.environ
    by default). A ConfigurationError exception is raised if either is
    missing or empty.
    """
    return Credentials(_lookup(environ, ACCESS_KEY_ID_VARIABLES),
                       _lookup(environ, SECRET_ACCESS_KEY_VARIABLES))

def resolve_region(environ=None):
    """
    resolve_region(environ=None) -> str

    Read the region from environ (os.environ by default).
    """
    return _lookup(environ, REGION_VARIABLES)

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
