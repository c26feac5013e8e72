import logging

from fileshortener.types import HandlerContext, HandlerEvent, HandlerResponse
from fileshortener.dao.exceptions import DAOError
from fileshortener.exceptions import ConfigurationError
from fileshortener.handlers.dependencies import open_registry
from fileshortener.handlers.responses import response_302, response_400, response_404, response_500
from fileshortener.handlers.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    REDIRECT_SUCCESS,
    CONFIGURATION_UNAVAILABLE,
    STORE_UNAVAILABLE,
)
from fileshortener.utils.helpers import get_short_url, guarantee_500_response


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: HandlerEvent, context: HandlerContext) -> HandlerResponse:
    """Handle incoming requests to redirect short URLs

    This handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode via the link registry
    - Step 3: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: shortcode isn't mapped to any URL
        500: Internal server error
            message: configuration or link store unavailable

    Args:
        event (dict):
            Request event containing the shortcode path parameter.
        context (Any):
            Runtime context object (not used directly).

    Returns:
        dict:
            Response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'ex1'}}
        >>> response = handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/page'
    """
    # 0- Get the link registry
    try:
        registry = open_registry('redirect_url')
    except (FileNotFoundError, ConfigurationError, DAOError) as error:
        logger.exception('Failed to set up link registry. Responding with 500.', extra={'event': CONFIGURATION_UNAVAILABLE})
        return response_500(error_code=getattr(error, 'error_code', CONFIGURATION_UNAVAILABLE))

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Resolve the shortcode
    try:
        target_url = registry.resolve(shortcode)
    except DAOError as error:
        logger.exception(
            'Link store unavailable. Responding with 500.',
            extra={'shortcode': shortcode, 'event': STORE_UNAVAILABLE, 'error': error.__class__.__name__},
        )
        return response_500(error_code=error.error_code)

    if target_url is None:
        logger.info('Short URL not found. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND})
        return response_404(message='Shortlink not found', error_code=SHORT_URL_NOT_FOUND)

    # 3- Redirect client to target URL
    logger.info('Redirecting client to target URL. Responding with 302.', extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS})
    return response_302(location=target_url)
