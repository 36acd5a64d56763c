"""End-to-end tests: cURL text -> request file -> cURL text through the CLI."""

from pathlib import Path

from click.testing import CliRunner

from curl_interchange.cli import main
from curl_interchange.parser.curl import parse_curl

FIXTURES = Path(__file__).parent / "fixtures"


def test_full_pipeline(tmp_path):
    original = (FIXTURES / "request.curl").read_text(encoding="utf-8")
    request_file = tmp_path / "request.yaml"
    runner = CliRunner()

    # Step 1: parse the pasted command into a request file
    result = runner.invoke(main, ["parse", "-i", str(FIXTURES / "request.curl"), "-o", str(request_file)])
    assert result.exit_code == 0
    assert request_file.exists()

    # Step 2: the transport would add nothing, Content-Type is explicit
    result = runner.invoke(main, ["content-type", str(request_file)])
    assert result.exit_code == 0
    assert "# Content-Type unchanged" in result.output

    # Step 3: generate the command back and compare what it means
    result = runner.invoke(main, ["generate", str(request_file)])
    assert result.exit_code == 0
    generated = result.output.strip()

    assert parse_curl(generated).request == parse_curl(original).request
    assert '-H "Authorization: Bearer token123"' in generated


def test_json_request_file_survives_round_trip(tmp_path):
    runner = CliRunner()
    result = runner.invoke(main, ["generate", str(FIXTURES / "json_post.json")])
    assert result.exit_code == 0

    reparsed = runner.invoke(main, ["parse", result.output.strip(), "--format", "json", "-o", str(tmp_path / "r.json")])
    assert reparsed.exit_code == 0

    again = runner.invoke(main, ["generate", str(tmp_path / "r.json")])
    assert again.output == result.output
