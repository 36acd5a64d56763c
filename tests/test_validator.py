from curl_interchange.parser.validator import looks_like_url, validate_curl


class TestValidateCurl:
    def test_valid_command(self):
        assert validate_curl("curl -X POST https://api.example.com/users") == []

    def test_valid_multiline_command(self):
        command = "curl https://api.example.com \\\n  -H 'Accept: application/json'"
        assert validate_curl(command) == []

    def test_flag_first_is_accepted(self):
        assert validate_curl("-X GET https://api.example.com") == []

    def test_empty(self):
        assert validate_curl("   ") == ["cURL command cannot be empty"]

    def test_wrong_program(self):
        problems = validate_curl("wget https://example.com")
        assert 'command must start with "curl" or an option' in problems

    def test_unterminated_quote(self):
        problems = validate_curl('curl -H "X: 1 https://example.com')
        assert problems == ['unterminated " quote at position 8']

    def test_unterminated_quote_offset_ignores_leading_space(self):
        problems = validate_curl("  curl -d 'x https://example.com")
        assert problems == ["unterminated ' quote at position 10"]

    def test_no_url(self):
        assert validate_curl("curl -X POST -d a=1") == ["no URL found in command"]

    def test_unrecognized_method(self):
        problems = validate_curl("curl -X FETCH https://example.com")
        assert problems == ["unrecognized HTTP method 'FETCH'"]

    def test_unrecognized_attached_method(self):
        assert validate_curl("curl -XFOO https://example.com") == ["unrecognized HTTP method 'FOO'"]
        assert validate_curl("curl -XPOST https://example.com") == []

    def test_unknown_leading_flag(self):
        problems = validate_curl("--bogus https://example.com")
        assert problems == ['command must start with "curl" or an option']

    def test_known_leading_flag_forms(self):
        for command in ("-sL https://example.com", "-HAccept:x https://example.com", "--compressed https://example.com"):
            assert validate_curl(command) == [], command

    def test_collects_several_problems(self):
        problems = validate_curl("http -X FETCH")
        assert len(problems) == 3


class TestLooksLikeUrl:
    def test_accepts_common_forms(self):
        for word in ("https://a.b/c", "http://localhost:3000", "api.example.com/v1", "localhost:8080/x", "10.0.0.1:80"):
            assert looks_like_url(word), word

    def test_rejects_non_urls(self):
        for word in ("POST", "application/json", "a=1&b=2", '{"a":1}'):
            assert not looks_like_url(word), word
