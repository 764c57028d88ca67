"""Tests for campaignbridge.http.params — request parameter access."""

from campaignbridge.http.params import MultiDict, RequestParams


class TestMultiDict:
    def test_first_value_and_list(self) -> None:
        md = MultiDict({"tag": ["a", "b"], "q": "x"})
        assert md["tag"] == "a"
        assert md.get_list("tag") == ["a", "b"]
        assert md["q"] == "x"
        assert len(md) == 2

    def test_parse(self) -> None:
        md = MultiDict.parse("page=campaignbridge-settings&tab=general&empty=")
        assert md["page"] == "campaignbridge-settings"
        assert md["tab"] == "general"
        assert md["empty"] == ""

    def test_parse_bytes(self) -> None:
        assert MultiDict.parse(b"a=1")["a"] == "1"

    def test_empty_value_list_is_absent(self) -> None:
        md = MultiDict({"x": [], "y": ["1"]})
        assert "x" not in md
        assert md.get("x") is None
        assert md.get_list("x") == []
        assert list(md) == ["y"]

    def test_get_default(self) -> None:
        md = MultiDict({"a": "1"})
        assert md.get("a") == "1"
        assert md.get("missing", "d") == "d"

class TestRequestParams:
    def test_defaults(self) -> None:
        params = RequestParams.empty()
        assert params.method == "GET"
        assert not params.is_submission
        assert params.user == ""
        assert len(params.query) == 0

    def test_method_normalised(self) -> None:
        assert RequestParams(method="post").method == "POST"

    def test_is_submission(self) -> None:
        assert RequestParams(method="POST").is_submission
        assert RequestParams(method="GET", form={"a": "1"}).is_submission
        assert not RequestParams(query={"tab": "general"}).is_submission

    def test_body_shadows_query(self) -> None:
        params = RequestParams(query={"tab": "general", "page": "p"}, form={"tab": "mailchimp"})
        assert params.get("tab") == "mailchimp"
        assert params.get("page") == "p"
        assert params.get("missing", "d") == "d"
        assert "page" in params
        assert "missing" not in params

    def test_get_list(self) -> None:
        params = RequestParams(query={"ids": ["1", "2"]})
        assert params.get_list("ids") == ["1", "2"]

    def test_from_query_string(self) -> None:
        params = RequestParams.from_query_string("page=x&tab=y")
        assert params.query["tab"] == "y"
        assert params.method == "GET"

    def test_user(self) -> None:
        assert RequestParams(user="42").user == "42"

    def test_empty_form_value_list(self) -> None:
        params = RequestParams(method="POST", form={"x": []}, query={"x": "q"})
        assert "x" not in params.form
        assert params.form.get("x") is None
        assert params.get("x") == "q"
