from .datetime import epoch_millis, isoformat_z, parse_timestamp, utcnow
from .slug import collection_slug, decode_segment, page_slug

__all__ = [
    "utcnow",
    "isoformat_z",
    "parse_timestamp",
    "epoch_millis",
    "collection_slug",
    "page_slug",
    "decode_segment",
]
