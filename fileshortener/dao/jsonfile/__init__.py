from fileshortener.dao.jsonfile.link_json_dao import LinkJsonDAO, encode_links, decode_links
from fileshortener.dao.jsonfile.mixins import JsonFileMixin


__all__ = [
    'LinkJsonDAO',
    'JsonFileMixin',
    'encode_links',
    'decode_links',
]
