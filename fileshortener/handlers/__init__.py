"""Request handlers translating HTTP-shaped events into link registry calls.

Handlers:
    shorten_url.app.handler   POST /submit       create a link
    redirect_url.app.handler  GET  /{shortcode}  redirect to a link's target
    list_links.app.handler    GET  /links        list all links
"""

from fileshortener.utils.logging import initialize_logging


initialize_logging()
