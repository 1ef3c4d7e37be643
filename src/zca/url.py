"""
URL and form-body construction for API calls.

Query order is fixed so URLs are reproducible:
    <pairs already on base_url> params zpw_ver zpw_type <extra query> nretry
"""

from typing import Any, Mapping, Optional
from urllib.parse import parse_qsl, quote, quote_plus, urlencode, urlsplit, urlunsplit

from zca.models.session import SessionContext

PARAMS_FIELD = "params"


def _to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_url(
    base_url: str,
    path: str,
    session: SessionContext,
    query: Optional[Mapping[str, Any]] = None,
    *,
    ciphertext: Optional[str] = None,
    nretry: Optional[int] = None,
) -> str:
    """Join base_url and path, then append the protocol markers and any extra query."""
    parts = urlsplit(base_url)
    joined_path = parts.path.rstrip("/") + "/" + path.lstrip("/") if path else parts.path

    pairs: list[tuple[str, str]] = parse_qsl(parts.query, keep_blank_values=True)
    seen = {k for k, _ in pairs}

    def add(key: str, value: Any) -> None:
        if value is None or key in seen:
            return
        seen.add(key)
        pairs.append((key, _to_str(value)))

    add(PARAMS_FIELD, ciphertext)
    add("zpw_ver", session.protocol_version)
    add("zpw_type", session.protocol_type)
    for key, value in (query or {}).items():
        add(key, value)
    add("nretry", nretry)

    # quote with safe="" so "+", "/" and "=" from base64 are escaped
    encoded = urlencode(pairs, safe="", quote_via=quote)
    return urlunsplit((parts.scheme, parts.netloc, joined_path, encoded, parts.fragment))


def form_body(fields: Mapping[str, Any]) -> str:
    """application/x-www-form-urlencoded body; None values are dropped."""
    return urlencode(
        [(k, _to_str(v)) for k, v in fields.items() if v is not None],
        quote_via=quote_plus,
    )
