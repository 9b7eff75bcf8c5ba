"""Tests for the command line and JSON exporter."""
import json

import pytest
from click.testing import CliRunner

from config import DeriveConfig, app_config, parse_overrides
from main import cli, load_target
from typeschema.exporter.json_exporter import JsonExporter
from typeschema.introspection.graph import derive_schema
from typeschema.types.classifier import ClassifierConfig

from tests.sample_models import Book, Kennel, Pet


@pytest.fixture
def runner():
    return CliRunner()


class TestJsonExporter:
    """Test document export."""

    def test_document_merges_schemas(self):
        config = ClassifierConfig()
        exporter = JsonExporter()
        doc = exporter.build_document([derive_schema(Book, config), derive_schema(Kennel, config)])

        assert doc["swagger"] == "2.0"
        assert set(doc["definitions"]) == {"Book", "Author", "Kennel", "Pet", "Owner"}
        assert doc["x-roots"] == {"Book": "#/definitions/Book", "Kennel": "#/definitions/Kennel"}

    def test_export_writes_file(self, tmp_path):
        output = tmp_path / "nested" / "definitions.json"
        JsonExporter().export(output, [derive_schema(Pet, ClassifierConfig())])

        data = json.loads(output.read_text())
        assert data["definitions"]["Pet"]["required"] == ["tags"]

    def test_export_returns_written_document(self, tmp_path):
        output = tmp_path / "definitions.json"
        document = JsonExporter().export(output, [derive_schema(Book, ClassifierConfig())])

        assert json.loads(output.read_text()) == document


class TestConfig:
    """Test environment configuration."""

    def test_parse_overrides(self):
        assert parse_overrides("uuid.UUID=string, pkg.Money = number,broken,=x") == {
            "uuid.UUID": "string",
            "pkg.Money": "number",
        }

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TYPESCHEMA_REF_PREFIX", "#/components/schemas/")
        monkeypatch.setenv("TYPESCHEMA_OVERRIDES", "uuid.UUID=string")

        config = DeriveConfig.from_env()

        assert config.ref_prefix == "#/components/schemas/"
        assert config.overrides == {"uuid.UUID": "string"}


class TestCli:
    """Test CLI commands."""

    def test_load_target(self):
        assert load_target("tests.sample_models:Pet") is Pet
        assert load_target("tests.sample_models.Pet") is Pet

    def test_derive_prints_document(self, runner):
        result = runner.invoke(cli, ["derive", "tests.sample_models:Pet"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["definitions"]["Pet"]["properties"]["tags"] == {
            "type": "array",
            "items": {"type": "string"},
        }

    def test_derive_with_override(self, runner):
        result = runner.invoke(
            cli,
            ["derive", "tests.sample_models:Kennel", "--override", "tests.sample_models.Owner=string"],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert "Owner" not in data["definitions"]
        assert data["definitions"]["Kennel"]["properties"]["rows"]["items"]["items"] == {"type": "string"}

    def test_derive_to_file(self, runner, tmp_path):
        output = tmp_path / "out.json"
        result = runner.invoke(cli, ["derive", "tests.sample_models:Book", "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "2 definitions written" in result.output
        assert set(json.loads(output.read_text())["definitions"]) == {"Book", "Author"}

    def test_relative_output_uses_output_dir(self, runner, tmp_path, monkeypatch):
        monkeypatch.setattr(app_config, "output_dir", str(tmp_path / "out"))

        result = runner.invoke(cli, ["derive", "tests.sample_models:Book", "-o", "defs.json"])

        assert result.exit_code == 0, result.output
        written = json.loads((tmp_path / "out" / "defs.json").read_text())
        assert "2 definitions written" in result.output
        assert set(written["definitions"]) == {"Book", "Author"}

    def test_derive_unknown_target(self, runner):
        result = runner.invoke(cli, ["derive", "tests.sample_models:Missing"])

        assert result.exit_code != 0
        assert "Could not load" in result.output

    def test_bad_override(self, runner):
        result = runner.invoke(cli, ["derive", "tests.sample_models:Pet", "--override", "x.Y=timestamp"])
        assert result.exit_code != 0

    def test_classify_type(self, runner):
        result = runner.invoke(cli, ["classify-type", "builtins:int"])

        assert result.exit_code == 0, result.output
        assert "integer (int32)" in result.output

    def test_list_overrides(self, runner):
        result = runner.invoke(cli, ["list-overrides"])

        assert result.exit_code == 0
        assert "datetime.datetime" in result.output
        assert "decimal.Decimal -> number" in result.output


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
