"""
Smoke Tests: end-to-end runs on synthetic files

No network access: the archive download is mocked.
"""

import io
import json
import zipfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pandas as pd
import pytest
from typer.testing import CliRunner

from src.household_power.cli import app
from src.household_power.config import PipelineConfig, load_config
from src.household_power.eda import (correlation_matrix, profile_by,
                                     summarize_load)
from src.household_power.errors import InsufficientDataError
from src.household_power.features import FEATURE_COLUMNS, derive_calendar_features
from src.household_power.ingest import fetch_dataset
from src.household_power.loader import load_observations
from src.household_power.tasks import run_full_pipeline, save_metrics


@pytest.mark.smoke
class TestRunFullPipeline:

    def test_reports_for_both_models(self, write_power_file, hourly_rows):
        path = write_power_file(hourly_rows)

        result = run_full_pipeline(PipelineConfig(), path=path)

        assert set(result.reports) == {"decision_tree", "neural_net"}
        for report in result.reports.values():
            assert report.n_rows == result.split.test_size
            assert report.rmse >= report.mae >= 0.0
            assert report.r2_defined

    def test_split_sizes(self, write_power_file, hourly_rows):
        path = write_power_file(hourly_rows)

        result = run_full_pipeline(PipelineConfig(), path=path)

        assert result.split.train_size == 576
        assert result.split.test_size == 144
        assert result.as_dict()["train_rows"] == 576

    def test_tree_captures_daily_pattern(self, write_power_file, hourly_rows):
        path = write_power_file(hourly_rows)

        result = run_full_pipeline(PipelineConfig(), path=path)

        assert result.reports["decision_tree"].r2 > 0.8
        assert result.leaderboard.iloc[0]["rank"] == 1

    def test_reproducible(self, write_power_file, hourly_rows):
        path = write_power_file(hourly_rows)
        config = PipelineConfig(seed=123)

        first = run_full_pipeline(config, path=path)
        second = run_full_pipeline(config, path=path)

        assert first.reports == second.reports

    def test_load_counts_in_summary(self, write_power_file, hourly_rows):
        rows = list(hourly_rows)
        rows[10] = (rows[10][0], rows[10][1], "?")
        path = write_power_file(rows)

        result = run_full_pipeline(PipelineConfig(), path=path)

        assert result.load_summary["clean_rows"] == len(rows) - 1
        assert result.load_summary["missing_values"] == 1

    def test_single_model(self, write_power_file, hourly_rows):
        path = write_power_file(hourly_rows)

        result = run_full_pipeline(PipelineConfig(models=("decision_tree",)), path=path)

        assert list(result.reports) == ["decision_tree"]

    @pytest.mark.fail_loud
    def test_too_few_rows_aborts(self, write_power_file):
        path = write_power_file([
            ("16/12/2006", "17:24:00", "4.216"),
            ("16/12/2006", "17:25:00", "?"),
        ])

        with pytest.raises(InsufficientDataError):
            run_full_pipeline(PipelineConfig(), path=path)

    def test_save_metrics(self, write_power_file, hourly_rows, tmp_path):
        path = write_power_file(hourly_rows)
        config = PipelineConfig(artifacts_dir=str(tmp_path / "artifacts"))
        result = run_full_pipeline(config, path=path)

        out = save_metrics(result, config)

        payload = json.loads(Path(out).read_text(encoding="utf-8"))
        assert set(payload["metrics"]) == {"decision_tree", "neural_net"}
        assert payload["split"]["train_size"] == 576
        assert [row["rank"] for row in payload["leaderboard"]] == [1, 2]


class TestConfig:

    def test_defaults(self):
        config = PipelineConfig()

        assert config.seed == 123
        assert config.train_fraction == 0.8
        assert config.tree.cp == 0.01
        assert config.tree.minsplit == 20
        assert config.nn.hidden_size == 10
        assert config.nn.max_iter == 200

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("HPC_SEED", "7")
        monkeypatch.setenv("HPC_NROWS", "1000")
        monkeypatch.setenv("HPC_DATA_DIR", "/tmp/hpc")

        config = load_config()

        assert config.seed == 7
        assert config.nrows == 1000
        assert str(config.raw_path()) == "/tmp/hpc/household_power_consumption.txt"

    def test_keyword_beats_env(self, monkeypatch):
        monkeypatch.setenv("HPC_SEED", "7")

        assert load_config(seed=11).seed == 11
        assert load_config(seed=None).seed == 7

    @pytest.mark.fail_loud
    def test_invalid_env_raises(self, monkeypatch):
        monkeypatch.setenv("HPC_SEED", "abc")

        with pytest.raises(ValueError, match="HPC_SEED"):
            load_config()

    @pytest.mark.fail_loud
    def test_invalid_fraction_raises(self, monkeypatch):
        monkeypatch.delenv("HPC_SEED", raising=False)

        with pytest.raises(ValueError, match="train_fraction"):
            load_config(train_fraction=1.2)


class TestEDA:

    def test_summary(self, write_power_file):
        path = write_power_file([
            ("16/12/2006", "17:24:00", "4.216"),
            ("16/12/2006", "17:25:00", "?"),
            ("16/12/2006", "17:26:00", "5.360"),
        ])

        summary = summarize_load(load_observations(path))

        assert summary["raw_rows"] == 3
        assert summary["clean_rows"] == 2
        assert summary["missing_values"] == 1
        assert summary["y_max"] == pytest.approx(5.360)
        assert summary["ds_min"] == "2006-12-16 17:24:00"

    def test_correlation_matrix(self, observations):
        corr = correlation_matrix(derive_calendar_features(observations))

        assert list(corr.columns) == FEATURE_COLUMNS + ["y"]
        assert corr.loc["y", "y"] == pytest.approx(1.0)

    def test_profile_by_weekday_in_calendar_order(self, observations):
        profile = profile_by(derive_calendar_features(observations), "weekday")

        assert profile["count"].sum() == len(observations)
        codes = pd.Categorical(profile["weekday"]).codes
        assert list(codes) == sorted(codes)

    def test_profile_unknown_key(self, observations):
        with pytest.raises(ValueError, match="Unknown calendar feature"):
            profile_by(derive_calendar_features(observations), "minute")


class TestIngest:

    @staticmethod
    def _zip_bytes(member: str, text: str) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w") as zf:
            zf.writestr(member, text)
        return buf.getvalue()

    def test_fetch_downloads_and_extracts(self, tmp_path):
        config = PipelineConfig(data_dir=str(tmp_path))
        payload = self._zip_bytes(config.raw_name, "Date;Time;Global_active_power\n")

        response = MagicMock()
        response.iter_content.return_value = [payload]
        response.__enter__.return_value = response
        session = MagicMock()
        session.get.return_value = response

        with patch("src.household_power.ingest.create_session", return_value=session):
            path = fetch_dataset(config)

        assert path == config.raw_path()
        assert path.read_text(encoding="utf-8").startswith("Date;Time")
        session.get.assert_called_once()

    def test_fetch_skips_existing(self, tmp_path):
        config = PipelineConfig(data_dir=str(tmp_path))
        config.raw_path().write_text("Date;Time;Global_active_power\n", encoding="utf-8")

        with patch("src.household_power.ingest.create_session") as create:
            path = fetch_dataset(config)

        create.assert_not_called()
        assert path == config.raw_path()


class TestCLI:

    def test_run_prints_metrics(self, write_power_file, hourly_rows):
        path = write_power_file(hourly_rows)

        result = CliRunner().invoke(app, ["run", "--data-path", str(path)])

        assert result.exit_code == 0, result.output
        assert "decision_tree" in result.output
        assert "neural_net" in result.output

    def test_run_fails_with_nonzero_exit(self, write_power_file):
        path = write_power_file([("16/12/2006", "17:24:00", "4.216")])

        result = CliRunner().invoke(app, ["run", "--data-path", str(path)])

        assert result.exit_code == 1
        assert "Pipeline failed" in result.output

    def test_missing_file_exit_code(self, tmp_path):
        result = CliRunner().invoke(app, ["run", "--data-path", str(tmp_path / "nope.txt")])

        assert result.exit_code == 1

    @pytest.mark.fail_loud
    def test_invalid_setting_exit_code(self, write_power_file, hourly_rows):
        path = write_power_file(hourly_rows)

        result = CliRunner().invoke(app, ["run", "--data-path", str(path), "--nrows", "0"])

        assert result.exit_code == 1
        assert "Pipeline failed" in result.output
        assert "nrows" in result.output

    @pytest.mark.fail_loud
    def test_invalid_env_exit_code(self, write_power_file, hourly_rows, monkeypatch):
        monkeypatch.setenv("HPC_SEED", "abc")
        path = write_power_file(hourly_rows)

        result = CliRunner().invoke(app, ["run", "--data-path", str(path)])

        assert result.exit_code == 1
        assert "HPC_SEED" in result.output
