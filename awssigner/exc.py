#!/usr/bin/env python
"""
AWS signing exceptions.
"""

class SigningError(Exception):
    """
    Base class for errors raised while signing a request.
    """
    pass

class ConfigurationError(SigningError, ValueError):
    """
    The credentials, region, or service needed to sign were not supplied or
    were empty.
    """
    pass

class MalformedRequestError(SigningError, ValueError):
    """
    The request lacks information (such as a host) needed to build the
    canonical request.
    """
    pass

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
