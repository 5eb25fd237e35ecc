import json
from pathlib import Path

from click.testing import CliRunner

from openapi_complexity.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliAnalyze:
    def test_table_output(self):
        runner = CliRunner()
        result = runner.invoke(main, ["analyze", str(FIXTURES / "petstore.yaml")])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0].split() == ["Method", "Path", "Req", "Fields", "Req", "Depth", "Resp", "Fields", "Resp", "Depth"]
        assert any(line.startswith("POST") and "/pets  (Create a pet)" in line for line in lines)
        assert "Swagger Petstore (version 1.0.0)" in result.output
        assert "Total response fields: 24" in result.output

    def test_json_output(self):
        runner = CliRunner()
        result = runner.invoke(main, ["analyze", str(FIXTURES / "swagger2.json"), "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["title"] == "Legacy Store"
        assert data["totalEndpoints"] == 2
        assert data["endpoints"][1]["operationId"] == "placeOrder"
        assert data["endpoints"][1]["request"] == {"fieldCount": 5, "maxDepth": 3}
        assert data["summary"]["maxResponseDepth"] == 4

    def test_write_to_file(self, tmp_path):
        output_file = tmp_path / "reports" / "petstore.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "analyze", str(FIXTURES / "petstore.yaml"),
            "--format", "json",
            "-o", str(output_file),
        ])

        assert result.exit_code == 0
        assert output_file.exists()
        assert json.loads(output_file.read_text())["totalEndpoints"] == 3

    def test_endpoint_filter(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "analyze", str(FIXTURES / "petstore.yaml"),
            "--format", "json",
            "--endpoint", "GET /pets/*",
        ])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["totalEndpoints"] == 1
        assert data["endpoints"][0]["path"] == "/pets/{petId}"
        assert data["summary"]["totalEndpoints"] == 1

    def test_rejects_non_openapi_file(self, tmp_path):
        f = tmp_path / "config.yaml"
        f.write_text("name: not an api\n")
        runner = CliRunner()
        result = runner.invoke(main, ["analyze", str(f)])

        assert result.exit_code == 1
        assert "not an OpenAPI/Swagger document" in result.output

    def test_rejects_unreadable_file(self, tmp_path):
        f = tmp_path / "broken.json"
        f.write_text("{ broken: [")
        runner = CliRunner()
        result = runner.invoke(main, ["analyze", str(f)])

        assert result.exit_code == 1
        assert "unreadable document" in result.output

    def test_rejects_non_utf8_file(self, tmp_path):
        f = tmp_path / "api.yaml"
        f.write_bytes(b"\xff\xfeopenapi: 3.0.0\n")
        runner = CliRunner()
        result = runner.invoke(main, ["analyze", str(f)])

        assert result.exit_code == 1
        assert "unreadable document" in result.output

    def test_rejects_unsupported_extension(self, tmp_path):
        f = tmp_path / "api.txt"
        f.write_text("openapi: 3.0.0\n")
        runner = CliRunner()
        result = runner.invoke(main, ["analyze", str(f)])

        assert result.exit_code == 1
        assert "unsupported file type" in result.output


class TestCliSummary:
    def test_summary_only(self):
        runner = CliRunner()
        result = runner.invoke(main, ["summary", str(FIXTURES / "recursive.yaml")])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Composition Zoo (version 2.1)",
            "  Endpoints:             2",
            "  Total request fields:  3",
            "  Total response fields: 5",
            "  Max request depth:     1",
            "  Max response depth:    3",
        ]

    def test_verbose_flag(self):
        runner = CliRunner()
        result = runner.invoke(main, ["-v", "summary", str(FIXTURES / "petstore.yaml")])
        assert result.exit_code == 0
