import pytest
from pydantic import ValidationError

from curl_interchange.parser.curl import parse_curl


def _request(command: str):
    result = parse_curl(command)
    assert result.success, result.errors
    return result.request


class TestSimpleRequests:
    def test_plain_get(self):
        request = _request("curl https://x/y")
        assert request.url == "https://x/y"
        assert request.method == "GET"
        assert request.headers == {}
        assert request.body.type == "none"
        assert request.auth.type == "none"

    def test_url_kept_verbatim(self):
        request = _request("curl 'https://api.example.com/search?q=a%20b&page=2'")
        assert request.url == "https://api.example.com/search?q=a%20b&page=2"

    def test_multiline_command(self):
        command = (
            "curl -X POST https://api.example.com/users \\\n"
            '    -H "Content-Type: application/json" \\\n'
            """    -d '{"name": "John Doe", "email": "john@example.com"}'"""
        )
        request = _request(command)
        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/json"
        assert request.body.content == '{"name": "John Doe", "email": "john@example.com"}'

    def test_request_is_immutable(self):
        request = _request("curl https://x")
        with pytest.raises(ValidationError):
            request.url = "https://y"


class TestBodyClassification:
    def test_json_content_type(self):
        request = _request("""curl -X POST -H 'Content-Type: application/json' -d '{"a":1}' https://x""")
        assert request.method == "POST"
        assert request.body.type == "raw"
        assert request.body.content == '{"a":1}'
        assert request.body.language == "json"
        assert request.headers == {"Content-Type": "application/json"}

    @pytest.mark.parametrize("content_type, language", [
        ("application/xml", "xml"),
        ("text/xml; charset=utf-8", "xml"),
        ("application/vnd.api+json", "json"),
        ("text/html", "html"),
        ("application/javascript", "javascript"),
        ("text/css", "css"),
        ("text/plain", "text"),
        ("application/octet-stream", "text"),
    ])
    def test_language_from_content_type(self, content_type, language):
        request = _request(f"curl -H 'Content-Type: {content_type}' -d '<a/>' https://x")
        assert request.body.language == language

    def test_content_type_beats_json_sniffing(self):
        request = _request("""curl -H 'Content-Type: text/plain' -d '{"a": 1}' https://x""")
        assert request.body.language == "text"

    def test_json_detected_without_content_type(self):
        request = _request("""curl -d '[{"a": 1}]' https://x""")
        assert request.body.language == "json"

    def test_non_json_without_content_type(self):
        assert _request("curl -d 'a=1' https://x").body.language == "text"
        assert _request("curl -d '42' https://x").body.language == "text"

    def test_url_encoded(self):
        request = _request(
            "curl -X POST -H 'Content-Type: application/x-www-form-urlencoded; charset=UTF-8' "
            "-d 'name=John+Doe&email=john%40example.com&age=30' https://x"
        )
        assert request.body.type == "url-encoded"
        assert [(p.key, p.value, p.enabled) for p in request.body.pairs] == [
            ("name", "John Doe", True),
            ("email", "john@example.com", True),
            ("age", "30", True),
        ]

    def test_data_segments_joined_with_ampersand(self):
        request = _request("curl -H 'Content-Type: application/x-www-form-urlencoded' -d a=1 -d b= https://x")
        assert [(p.key, p.value) for p in request.body.pairs] == [("a", "1"), ("b", "")]

    def test_raw_segments_joined_with_ampersand(self):
        assert _request("curl -d a=1 -d b=2 https://x").body.content == "a=1&b=2"

    def test_form_data(self):
        request = _request("curl -F name=bob -F avatar=@/tmp/a.png https://x")
        assert request.body.type == "form-data"
        assert len(request.body.fields) == 2
        assert request.body.fields[0].type == "text"
        assert request.body.fields[1].type == "file"
        assert request.body.fields[1].file_path == "/tmp/a.png"

    def test_form_wins_over_data(self):
        result = parse_curl("curl -F a=1 -d b=2 https://x")
        assert result.request.body.type == "form-data"
        assert result.warnings[0].kind == "IgnoredData"


class TestAuth:
    def test_basic_from_user_flag(self):
        auth = _request("curl -u alice:secret https://x").auth
        assert auth.type == "basic"
        assert auth.username == "alice"
        assert auth.password == "secret"

    def test_bearer_from_header(self):
        request = _request('curl -H "Authorization: Bearer token123" -H "Accept: */*" https://x')
        assert request.auth.type == "bearer"
        assert request.auth.token == "token123"
        assert request.auth.prefix == "Bearer"
        assert request.headers == {"Accept": "*/*"}

    def test_bearer_prefix_case_preserved(self):
        auth = _request('curl -H "authorization: bearer abc" https://x').auth
        assert auth.prefix == "bearer"
        assert auth.token == "abc"

    def test_token_scheme(self):
        auth = _request('curl -H "Authorization: Token abc" https://x').auth
        assert (auth.type, auth.prefix) == ("bearer", "Token")

    def test_basic_header_not_decoded(self):
        request = _request('curl -H "Authorization: Basic YWxpY2U6c2VjcmV0" https://x')
        assert request.auth.type == "none"
        assert request.headers == {"Authorization": "Basic YWxpY2U6c2VjcmV0"}

    def test_user_flag_beats_bearer_header(self):
        request = _request('curl -u a:b -H "Authorization: Bearer t" https://x')
        assert request.auth.type == "basic"
        assert request.headers == {"Authorization": "Bearer t"}


class TestOptions:
    def test_toggles_and_values(self):
        options = _request("curl -sL --compressed -k --max-time 30 -b 'sid=1' https://x").options
        assert options.silent and options.follow_redirects and options.compressed and options.insecure
        assert options.timeout == 30.0
        assert options.cookies == "sid=1"
        assert options.verbose is False


class TestFailures:
    def test_unterminated_quote(self):
        result = parse_curl('curl -H "X: 1')
        assert not result.success
        assert result.request is None
        assert result.errors[0].kind == "UnterminatedQuote"
        assert result.errors[0].position == 8
        assert "position 8" in result.errors[0].message

    def test_multiple_urls(self):
        result = parse_curl("curl https://a.example.com https://b.example.com")
        assert not result.success
        assert result.errors[0].kind == "MultipleUrls"

    def test_missing_url(self):
        assert parse_curl("curl -v").errors[0].kind == "MissingUrl"

    def test_empty_input(self):
        assert parse_curl("").errors[0].kind == "MissingUrl"

    def test_missing_argument(self):
        assert parse_curl("curl https://x -d").errors[0].kind == "MissingArgument"

    def test_unsupported_flag_is_only_a_warning(self):
        result = parse_curl("curl --http2 https://x")
        assert result.success
        assert [w.kind for w in result.warnings] == ["UnsupportedFlag"]
