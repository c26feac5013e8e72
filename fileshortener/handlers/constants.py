# Event / error codes attached to handler logs and error responses
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'

INVALID_BODY = 'INVALID_BODY'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'
LINK_CREATED = 'LINK_CREATED'

LINKS_LISTED = 'LINKS_LISTED'

CONFIGURATION_UNAVAILABLE = 'CONFIGURATION_UNAVAILABLE'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
