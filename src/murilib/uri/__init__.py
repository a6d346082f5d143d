__version__ = "0.1"

from .codec import decode_latin1, decode_path, decode_path_segment, decode_uri_component, decode_urn_path, decode_urn_path_segment, encode_latin1, encode_path_segment, encode_reserved, encode_uri_component, encode_urn_path_segment, recode_path, recode_urn_path
from .config import DEFAULT_CONFIG, DEFAULT_PORTS, Config
from .parse import Parts, build, ensure_valid_hostname, ensure_valid_port, parse, parse_authority, parse_host, parse_userinfo
from .path import common_path, normalize_path, trim_slashes
from .query import UNSET, add_query, build_query, decode_query, encode_query, has_query, parse_query, remove_query, set_query
from .scan import within_string
from .uri import URI
