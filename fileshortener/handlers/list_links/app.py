import logging

from fileshortener.types import HandlerContext, HandlerEvent, HandlerResponse
from fileshortener.dao.exceptions import DAOError
from fileshortener.exceptions import ConfigurationError
from fileshortener.handlers.dependencies import open_registry
from fileshortener.handlers.responses import response_200, response_500
from fileshortener.handlers.constants import LINKS_LISTED, CONFIGURATION_UNAVAILABLE, STORE_UNAVAILABLE
from fileshortener.utils.helpers import guarantee_500_response


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: HandlerEvent, context: HandlerContext) -> HandlerResponse:
    """Handle incoming requests to list all links

    HTTP responses:
        200: Successful listing
            links: mapping of shortcode -> target URL
            count: number of links
        500: Internal server error
            message: configuration or link store unavailable

    Example:
        >>> response = handler({}, None)
        >>> json.loads(response['body'])
        {'links': {'ex1': 'https://example.com/page'}, 'count': 1}
    """
    try:
        registry = open_registry('list_links')
        links = registry.list_all()
    except (FileNotFoundError, ConfigurationError) as error:
        logger.exception('Failed to set up link registry. Responding with 500.', extra={'event': CONFIGURATION_UNAVAILABLE})
        return response_500(error_code=getattr(error, 'error_code', CONFIGURATION_UNAVAILABLE))
    except DAOError as error:
        logger.exception('Link store unavailable. Responding with 500.', extra={'event': STORE_UNAVAILABLE, 'error': error.__class__.__name__})
        return response_500(error_code=error.error_code)

    logger.info('Listing links. Responding with 200.', extra={'event': LINKS_LISTED, 'count': len(links)})
    return response_200({'links': dict(links), 'count': len(links)})
