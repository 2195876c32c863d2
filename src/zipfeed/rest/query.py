from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import urlencode, urlsplit, urlunsplit, parse_qsl


def build_query_url(base_url: str, path: str = '', params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Builds a GET URL out of an API base URL, a resource path and query parameters.

    - The base and the path are joined with exactly one slash
    - Parameters whose value is None are left out
    - List and tuple values become repeated parameters
    - Booleans are rendered as ``true``/``false``
    - Query parameters already present in the base URL are kept, before the new ones
    """

    scheme, netloc, base_path, base_query, fragment = urlsplit(base_url)

    if path != '':
        base_path = base_path.rstrip('/') + '/' + path.lstrip('/')

    query_items = parse_qsl(base_query, keep_blank_values=True) + _flatten_params(params or {})

    return urlunsplit((scheme, netloc, base_path, urlencode(query_items), fragment))


def _flatten_params(params: Mapping[str, Any]) -> List[Tuple[str, str]]:
    result = []

    for key, value in params.items():
        values = value if isinstance(value, (list, tuple)) else [value]

        for item in values:
            if item is None:
                continue

            result.append((key, _render_param_value(item)))

    return result


def _render_param_value(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'

    return str(value)
