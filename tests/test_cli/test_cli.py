"""Tests for the responsive-images CLI commands."""
from __future__ import annotations

import json

import pytest
from click.testing import CliRunner
from PIL import Image

from responsive_images.cli.main import cli


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "ALLOWED_EXTENSIONS",
        "MAX_WORKERS",
        "STRICT_DENSITIES",
        "DENSITY_SUFFIX",
        "FALLBACK_POLICY",
        "SITE_URL",
        "OUTPUT_DIR",
        "BASE_URL",
    ):
        monkeypatch.delenv(f"RESPONSIVE_IMAGES_{name}", raising=False)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_cli_group_help(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "responsive <picture> elements" in result.output

    def test_cli_lists_commands(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert "plan" in result.output
        assert "parse-sizes" in result.output
        assert "parse-densities" in result.output

    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "responsive-images" in result.output


# ---------------------------------------------------------------------------
# parse commands
# ---------------------------------------------------------------------------


class TestParseCommands:
    def test_parse_sizes(self) -> None:
        result = CliRunner().invoke(cli, ["parse-sizes", "(max-width: 414px) 378px, 634px"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {"media_condition": "(max-width: 414px)", "image_width": "378", "is_default": False},
            {"media_condition": "", "image_width": "634", "is_default": True},
        ]

    def test_parse_densities(self) -> None:
        result = CliRunner().invoke(cli, ["parse-densities", "1, 2, 1.5"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [1.0, 2.0, 1.5]

    def test_parse_densities_strict_error(self) -> None:
        result = CliRunner().invoke(cli, ["parse-densities", "--strict", "1, two"])
        assert result.exit_code == 1
        assert "Invalid pixel density" in result.output


# ---------------------------------------------------------------------------
# plan command
# ---------------------------------------------------------------------------


class TestPlanCommand:
    def test_plan_help_shows_options(self) -> None:
        result = CliRunner().invoke(cli, ["plan", "--help"])
        assert result.exit_code == 0
        for option in ("--sizes", "--densities", "--special-function", "--dry-run", "--fallback"):
            assert option in result.output

    def test_dry_run(self, image_path, tmp_path) -> None:
        result = CliRunner().invoke(
            cli,
            [
                "plan",
                str(image_path),
                "--sizes",
                "(max-width: 414px) 378px, 634px",
                "--densities",
                "1,2",
                "--base-url",
                "/img/",
                "--output-dir",
                str(tmp_path / "out"),
                "--dry-run",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["sources"][0] == {
            "media": "(max-width: 414px)",
            "srcset": "/img/photo-378x302.jpg, /img/photo-756x605.jpg 2x",
        }
        assert data["fallback"] == {
            "src": "/img/photo-634x507.jpg",
            "width": 634,
            "height": 507,
            "alt": "",
        }
        assert not (tmp_path / "out").exists()

    def test_renders_files(self, image_path, tmp_path) -> None:
        out = tmp_path / "out"
        result = CliRunner().invoke(
            cli,
            [
                "plan",
                str(image_path),
                "--sizes",
                "200px",
                "--densities",
                "1",
                "--output-dir",
                str(out),
                "--special-function",
                "square",
                "--absolute",
                "--site-url",
                "https://example.com",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["fallback"]["width"] == data["fallback"]["height"] == 200
        assert data["fallback"]["src"].startswith("https://example.com/_processed_/photo_")
        assert len(list(out.iterdir())) == 1

    def test_error_reported_with_code(self, image_path) -> None:
        result = CliRunner().invoke(
            cli,
            ["plan", str(image_path), "--sizes", "100px", "--file-extension", "exe", "--dry-run"],
        )
        assert result.exit_code == 1
        assert "[1618989190]" in result.output

    def test_unwritable_format_reported_with_code(self, tmp_path) -> None:
        source = tmp_path / "photo.dat"
        Image.new("RGB", (100, 80)).save(source, format="JPEG")
        result = CliRunner().invoke(
            cli,
            ["plan", str(source), "--sizes", "50px", "--output-dir", str(tmp_path / "out")],
        )
        assert result.exit_code == 1
        assert "[1509741914]" in result.output

    def test_alt_and_title(self, image_path) -> None:
        result = CliRunner().invoke(
            cli,
            [
                "plan",
                str(image_path),
                "--sizes",
                "100px",
                "--alt",
                "A red square",
                "--title",
                "Red",
                "--dry-run",
            ],
        )
        assert result.exit_code == 0, result.output
        fallback = json.loads(result.output)["fallback"]
        assert (fallback["alt"], fallback["title"]) == ("A red square", "Red")
