"""Tests for CLI commands."""

import json
import logging
from decimal import Decimal
from unittest.mock import patch

from typer.testing import CliRunner

from vehicletax.cli import app
from vehicletax.engines.rates import DEFAULT_RATE_TABLES
from vehicletax.exceptions import ExplanationError, OutOfDomainError
from vehicletax.explain import DEFAULT_MODEL

runner = CliRunner()


class TestHelp:
    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Karnataka" in result.output

    def test_estimate_help(self):
        result = runner.invoke(app, ["estimate", "--help"])
        assert result.exit_code == 0

    def test_tables_help(self):
        result = runner.invoke(app, ["tables", "--help"])
        assert result.exit_code == 0

    def test_form_help(self):
        result = runner.invoke(app, ["form", "--help"])
        assert result.exit_code == 0


class TestEstimateCommand:
    def test_table_output(self):
        result = runner.invoke(app, ["estimate", "Car", "--cost", "850000", "--age", "5"])
        assert result.exit_code == 0, result.output
        assert "82,110.00" in result.output

    def test_json_output(self):
        result = runner.invoke(
            app, ["estimate", "Car", "--cost", "850000", "--age", "5", "--format", "json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["category"] == "Car"
        assert Decimal(data["estimated_tax"]) == Decimal("82110")
        assert Decimal(data["applied_tax_rate"]) == Decimal("0.14")
        assert data["depreciation_band"]["max_age"] == "6"
        assert "explanation" not in data

    def test_text_output(self):
        result = runner.invoke(
            app, ["estimate", "motorcycle", "-c", "75,000", "-a", "3", "-f", "text"]
        )
        assert result.exit_code == 0, result.output
        assert "ESTIMATED LIFETIME TAX: ₹ 7,290.00" in result.output

    def test_unknown_format(self):
        result = runner.invoke(
            app, ["estimate", "Car", "--cost", "1", "--age", "1", "--format", "xml"]
        )
        assert result.exit_code == 1

    def test_zero_cost(self):
        result = runner.invoke(app, ["estimate", "Car", "--cost", "0", "--age", "5"])
        assert result.exit_code == 1
        assert "Please enter a valid vehicle cost." in result.output

    def test_negative_age(self):
        result = runner.invoke(app, ["estimate", "Car", "--cost", "100000", "--age", "-1"])
        assert result.exit_code == 1
        assert "Please enter a valid vehicle age." in result.output

    def test_unknown_category(self):
        result = runner.invoke(app, ["estimate", "Truck", "--cost", "100000", "--age", "1"])
        assert result.exit_code == 1
        assert "vehicle type" in result.output

    def test_out_of_domain_is_generic_failure(self):
        with patch(
            "vehicletax.engines.estimator.VehicleTaxEstimator.estimate",
            side_effect=OutOfDomainError(Decimal("1"), "vehicle age"),
        ):
            result = runner.invoke(app, ["estimate", "Car", "--cost", "100000", "--age", "1"])
        assert result.exit_code == 2
        assert "could not be computed" in result.output

    def test_custom_tables(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(DEFAULT_RATE_TABLES.model_dump_json())
        result = runner.invoke(
            app,
            ["estimate", "Car", "--cost", "850000", "--age", "5", "-f", "json", "--tables", str(path)],
        )
        assert result.exit_code == 0, result.output
        assert Decimal(json.loads(result.output)["estimated_tax"]) == Decimal("82110")

    def test_missing_tables_file(self, tmp_path):
        result = runner.invoke(
            app,
            ["estimate", "Car", "--cost", "1", "--age", "1", "--tables", str(tmp_path / "none.json")],
        )
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_tables_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"depreciation": [], "tax_rates": {}}))
        result = runner.invoke(
            app, ["estimate", "Car", "--cost", "1", "--age", "1", "--tables", str(path)]
        )
        assert result.exit_code == 1
        assert "invalid rate table file" in result.output

    def test_tables_path_is_directory(self, tmp_path):
        result = runner.invoke(
            app, ["estimate", "Car", "--cost", "1", "--age", "1", "--tables", str(tmp_path)]
        )
        assert result.exit_code == 1
        assert "cannot read rate table file" in result.output

    def test_tables_file_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b"\xff\xfe\x00")
        result = runner.invoke(app, ["tables", "--tables", str(path)])
        assert result.exit_code == 1
        assert "cannot read rate table file" in result.output

    def test_very_large_cost(self):
        result = runner.invoke(
            app, ["estimate", "Car", "--cost", "1e30", "--age", "1", "-f", "json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert Decimal(data["estimated_tax"]) == Decimal("1.674E+29")
        assert data["breakdown_text"].endswith(".00")


class TestEstimateExplain:
    def test_explanation_appended(self):
        with patch("vehicletax.explain.Explainer") as explainer_cls:
            explainer_cls.return_value.explain.return_value = "Plain words."
            result = runner.invoke(
                app,
                ["estimate", "Car", "--cost", "850000", "--age", "5", "-f", "json", "--explain"],
            )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["explanation"] == "Plain words."
        assert Decimal(data["estimated_tax"]) == Decimal("82110")

    def test_default_model(self):
        with patch("vehicletax.explain.Explainer") as explainer_cls:
            explainer_cls.return_value.explain.return_value = "Plain words."
            runner.invoke(
                app, ["estimate", "Car", "--cost", "850000", "--age", "5", "-f", "json", "--explain"]
            )
        explainer_cls.assert_called_once_with(model=DEFAULT_MODEL)

    def test_explanation_failure_keeps_estimate(self):
        with patch("vehicletax.explain.Explainer") as explainer_cls:
            explainer_cls.return_value.explain.side_effect = ExplanationError("boom")
            result = runner.invoke(
                app, ["estimate", "Car", "--cost", "850000", "--age", "5", "-f", "text", "--explain"]
            )
        assert result.exit_code == 0
        assert "Warning: Explanation failed: boom" in result.output
        assert "₹ 82,110.00" in result.output

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        result = runner.invoke(
            app, ["estimate", "Car", "--cost", "850000", "--age", "5", "-f", "text", "--explain"]
        )
        assert result.exit_code == 0
        assert "ANTHROPIC_API_KEY" in result.output


class TestTablesCommand:
    def test_shows_all_tables(self):
        result = runner.invoke(app, ["tables"])
        assert result.exit_code == 0, result.output
        assert "Less than 2 years" in result.output
        assert "93%" in result.output
        assert "15 years and more" in result.output
        assert "Up to 5,00,000" in result.output
        assert "Above 1,00,000" in result.output


class TestFormCommand:
    def test_form_via_stdin(self):
        result = runner.invoke(app, ["form"], input="Car\n850000\n5\n")
        assert result.exit_code == 0, result.output
        assert "82,110.00" in result.output

    def test_verbose_flag_enables_debug_logging(self):
        with patch("vehicletax.cli.logging.basicConfig") as basic_config:
            result = runner.invoke(app, ["-v", "estimate", "Car", "--cost", "850000", "--age", "5"])
        assert result.exit_code == 0, result.output
        assert basic_config.call_args.kwargs["level"] == logging.DEBUG
