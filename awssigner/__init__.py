#!/usr/bin/env python
"""
AWS Signature Version 4 request signing.
"""

from .exc import ConfigurationError, MalformedRequestError, SigningError
from .request import Headers, SignableRequest
from .sigv4 import (
    Credentials, OtherService, Service, Signer, SigningScope, sign_request)

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
