from fileshortener.models.link_record import LinkRecord


__all__ = [
    'LinkRecord',
]
