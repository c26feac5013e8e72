from fileshortener.dao.base import LinkBaseDAO
from fileshortener.dao.jsonfile import LinkJsonDAO


__all__ = [
    'LinkBaseDAO',
    'LinkJsonDAO',
]
