"""Fixed values of the remote service: origin, handshake paths, defaults."""

DEFAULT_BASE_URL = "https://www.goodreads.com/"
DEFAULT_USER_AGENT = "readloom/0.1.0"
DEFAULT_RESPONSE_FORMAT = "xml"

# Top-level element every XML response is wrapped in
RESPONSE_ENVELOPE = "GoodreadsResponse"

# OAuth1 handshake
REQUEST_TOKEN_PATH = "oauth/request_token"
AUTHORIZE_PATH = "oauth/authorize"
ACCESS_TOKEN_PATH = "oauth/access_token"

# Default query parameter names
API_KEY_PARAM = "key"
FORMAT_PARAM = "format"
