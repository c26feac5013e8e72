import logging

from fileshortener.types import HandlerContext, HandlerEvent, HandlerResponse
from fileshortener.dao.exceptions import DAOError
from fileshortener.exceptions import ConfigurationError, GenerationExhaustedError, ShortcodeTakenError, ValidationError
from fileshortener.handlers.dependencies import open_registry
from fileshortener.handlers.responses import response_200, response_400, response_409, response_500
from fileshortener.handlers.constants import (
    INVALID_BODY,
    MISSING_TARGET_URL,
    LINK_CREATED,
    CONFIGURATION_UNAVAILABLE,
    STORE_UNAVAILABLE,
)
from fileshortener.utils.helpers import get_short_url, guarantee_500_response, parse_body


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: HandlerEvent, context: HandlerContext) -> HandlerResponse:
    """Handle incoming requests to shorten URLs

    This handler follows this procedure to shorten URLs:
    - Step 1: Extract target URL and optional shortcode from request body
    - Step 2: Create the link via the link registry (persisted before returning)
    - Step 3: Respond to user with 200 success

    The body is either JSON ({"target_url": ..., "shortcode": ...}) or an
    HTML form (url=...&shortcode=...). An empty shortcode means "generate one".

    HTTP responses:
        200: Successful URL shortening
            message: success message
            target_url: original url (provided in request)
            short_url: newly created short url
            shortcode: requested or generated shortcode
        400: Bad client request
            message: invalid body, missing/invalid target URL or invalid shortcode
        409: Conflict
            message: requested shortcode already exists
        500: Internal server error
            message: configuration or link store unavailable, shortcodes exhausted

    Args:
        event (dict):
            Request event with the body to parse.
        context (Any):
            Runtime context object (not used directly).

    Returns:
        dict:
            Response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"target_url": "https://example.com", "shortcode": "ex1"}'}
        >>> response = handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['short_url']
        'http://localhost:3001/ex1'
    """
    # 0- Get the link registry
    try:
        registry = open_registry('shorten_url')
    except (FileNotFoundError, ConfigurationError, DAOError) as error:
        logger.exception('Failed to set up link registry. Responding with 500.', extra={'event': CONFIGURATION_UNAVAILABLE})
        return response_500(error_code=getattr(error, 'error_code', CONFIGURATION_UNAVAILABLE))

    # 1- Extract target URL and shortcode from request body
    try:
        body = parse_body(event)
    except ValueError:
        logger.info('Invalid request body. Responding with 400.', extra={'event': INVALID_BODY})
        return response_400(message='invalid request body', error_code=INVALID_BODY)

    target_url = body.get('target_url') or body.get('url')
    if not target_url:
        logger.info('Missing target URL in request body. Responding with 400.', extra={'event': MISSING_TARGET_URL})
        return response_400(message="missing 'target_url' in request body", error_code=MISSING_TARGET_URL)
    requested_shortcode = body.get('shortcode') or None

    # 2- Create the link
    try:
        link = registry.create(target_url, requested_shortcode)
    except ValidationError as error:
        logger.info('Rejected link input. Responding with 400.', extra={'event': error.error_code, 'reason': str(error)})
        return response_400(message=str(error), error_code=error.error_code)
    except ShortcodeTakenError as error:
        logger.info('Shortcode already exists. Responding with 409.', extra={'shortcode': requested_shortcode, 'event': error.error_code})
        return response_409(message='Shortcode already exists!', error_code=error.error_code)
    except (GenerationExhaustedError, DAOError) as error:
        logger.exception('Failed to create link. Responding with 500.', extra={'event': STORE_UNAVAILABLE, 'error': error.__class__.__name__})
        return response_500(error_code=error.error_code)

    # 3- Return successful response to user
    short_url = get_short_url(link.shortcode, event)
    logger.info('Created short URL. Responding with 200.', extra={'shortcode': link.shortcode, 'event': LINK_CREATED})
    return response_200(
        {
            'message': f'Successfully shortened {link.target} to {short_url}',
            'target_url': link.target,
            'short_url': short_url,
            'shortcode': link.shortcode,
        }
    )
