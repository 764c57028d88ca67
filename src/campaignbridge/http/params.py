"""Request parameters — read-only query and body values for one request.

``RequestParams`` is what the host hands to the engine for every page
view.  The dispatcher reads the active tab from it; controllers receive
it in ``handle_request``; views reach it through the Screen Context.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from urllib.parse import parse_qs


def _normalise(data: Mapping[str, str | Iterable[str]] | None) -> dict[str, tuple[str, ...]]:
    if not data:
        return {}
    normalised: dict[str, tuple[str, ...]] = {}
    for key, value in data.items():
        values = (value,) if isinstance(value, str) else tuple(str(v) for v in value)
        # A key submitted with no values is treated as absent.
        if values:
            normalised[key] = values
    return normalised


class MultiDict(Mapping[str, str]):
    """Read-only view of form or query values, keyed by field name.

    Indexing yields the first submitted value; ``get_list`` yields every
    value in submission order.  Keys whose value list is empty are
    dropped, so ``key in md`` always means ``md[key]`` succeeds.
    """

    __slots__ = ("_values",)

    def __init__(self, data: Mapping[str, str | Iterable[str]] | None = None) -> None:
        self._values = _normalise(data)

    @classmethod
    def parse(cls, encoded: str | bytes) -> MultiDict:
        """Build from a URL-encoded query string or form body."""
        if isinstance(encoded, bytes):
            encoded = encoded.decode("latin-1")
        return cls(parse_qs(encoded, keep_blank_values=True))

    def __getitem__(self, key: str) -> str:
        return self._values[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"MultiDict({self._values!r})"

    def get_list(self, key: str) -> list[str]:
        return list(self._values.get(key, ()))


class RequestParams:
    """Query and body parameters of the current request.

    Usage::

        params = RequestParams.from_query_string("page=campaignbridge-settings&tab=general")
        params = RequestParams(method="POST", form={"from_name": "Acme"})

    ``get()`` looks in the body first, then the query string.  *user* is
    the host's identifier for the signed-in user.
    """

    __slots__ = ("_form", "_method", "_query", "_user")

    def __init__(
        self,
        *,
        method: str = "GET",
        query: Mapping[str, str | Iterable[str]] | None = None,
        form: Mapping[str, str | Iterable[str]] | None = None,
        user: str = "",
    ) -> None:
        self._method = method.upper()
        self._user = user
        self._query = query if isinstance(query, MultiDict) else MultiDict(query)
        self._form = form if isinstance(form, MultiDict) else MultiDict(form)

    @classmethod
    def from_query_string(cls, query_string: str | bytes, *, method: str = "GET") -> RequestParams:
        return cls(method=method, query=MultiDict.parse(query_string))

    @classmethod
    def empty(cls) -> RequestParams:
        return cls()

    @property
    def method(self) -> str:
        return self._method

    @property
    def query(self) -> MultiDict:
        return self._query

    @property
    def form(self) -> MultiDict:
        return self._form

    @property
    def user(self) -> str:
        """Identifier of the signed-in user; nonces are bound to it."""
        return self._user

    @property
    def is_submission(self) -> bool:
        """``True`` for POST requests or any request carrying a body."""
        return self._method == "POST" or len(self._form) > 0

    def get(self, key: str, default: str | None = None) -> str | None:
        value = self._form.get(key)
        if value is not None:
            return value
        return self._query.get(key, default)

    def get_list(self, key: str) -> list[str]:
        return self._form.get_list(key) or self._query.get_list(key)

    def __contains__(self, key: object) -> bool:
        return key in self._form or key in self._query

    def __repr__(self) -> str:
        return f"RequestParams(method={self._method!r}, query={self._query!r}, form={self._form!r})"
