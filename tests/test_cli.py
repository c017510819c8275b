"""Tests for the command line front end."""

import argparse

import pytest

import chart_position
import hamchart.cli
from hamchart.coordinates import InvalidCoordinate
from hamchart.maidenhead import InvalidLocator


def make_args(**overrides):
    values = dict(latitude=None, longitude=None, locator=None, name=None, metric=False, size=None)
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.fixture
def config(tmp_path):
    return hamchart.cli.load_config(tmp_path / "missing.toml")


def test_load_config_defaults(config):
    assert config["form"]["size"] == "letter"
    assert config["form"]["metric"] is False
    assert config["paper_sizes_mm"]["a4"] == (210.0, 297.0)


def test_load_config_overrides(tmp_path):
    path = tmp_path / "chart.toml"
    path.write_text(
        '[form]\nmetric = true\nsize = "a3"\n\n[paper.Tabloid]\nwidth_mm = 279.4\nheight_mm = 431.8\n',
        encoding="utf-8",
    )
    config = hamchart.cli.load_config(path)
    assert config["form"]["metric"] is True
    assert config["form"]["size"] == "a3"
    assert config["form"]["timeout"] == 60
    assert config["paper_sizes_mm"]["tabloid"] == (279.4, 431.8)
    assert "letter" in config["paper_sizes_mm"]


def test_build_form_from_coordinates(config):
    form = hamchart.cli.build_form(make_args(latitude="40 25 0.5 N", longitude="3 42 13.7 W", name="Madrid"), config)
    assert (form.latitude, form.longitude, form.name) == ("40.41681", "-3.70381", "Madrid")
    assert form.size == "letter"


def test_build_form_from_locator(config, capsys):
    form = hamchart.cli.build_form(make_args(locator="fn42", metric=True), config)
    assert form.name == "Maidenhead locator FN42"
    assert form.size == "a4"
    assert "✓ Decoded Maidenhead locator FN42" in capsys.readouterr().out


def test_explicit_size_wins_over_metric(config):
    form = hamchart.cli.build_form(make_args(locator="FN42", metric=True, size="a3"), config)
    assert form.size == "a3"
    assert form.metric


def test_build_form_errors(config):
    with pytest.raises(InvalidLocator):
        hamchart.cli.build_form(make_args(locator="zz99"), config)
    with pytest.raises(InvalidCoordinate, match="hemisphere"):
        hamchart.cli.build_form(make_args(latitude="40 30", longitude="10"), config)
    with pytest.raises(InvalidCoordinate, match="required"):
        hamchart.cli.build_form(make_args(latitude="40"), config)


@pytest.mark.parametrize(
    "line, expected",
    [
        ("40 30 N, 3 30 W", "40.5, -3.5"),
        ("FN42", "42.5, -71"),
        ("91N, 10E", None),
        ("zz99", None),
        ("40.5", None),
    ],
)
def test_normalize_line(line, expected):
    assert hamchart.cli.normalize_line(line) == expected


def test_normalize_batch(tmp_path, capsys):
    path = tmp_path / "positions.txt"
    path.write_text("# home\nFN42\n\n40 30 N, 3 30 W\nzz99\n", encoding="utf-8")
    invalid = hamchart.cli.normalize_batch(path)
    out = capsys.readouterr().out
    assert invalid == 1
    assert "FN42\t42.5, -71" in out
    assert "40 30 N, 3 30 W\t40.5, -3.5" in out
    assert "zz99\tinvalid" in out
    assert "home" not in out


def test_main_prints_position(tmp_path, capsys):
    code = chart_position.main(["-l", "FN42", "--config", str(tmp_path / "none.toml")])
    out = capsys.readouterr().out
    assert code == 0
    assert "✓ Latitude: 42.5" in out
    assert "✓ Longitude: -71" in out
    assert "letter (8.50 x 11.00 in)" in out


def test_main_rejects_bad_locator(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        chart_position.main(["-l", "zz99", "--config", str(tmp_path / "none.toml")])
    assert excinfo.value.code == 1
    assert "✗ Error" in capsys.readouterr().out


def test_main_submits_to_server(tmp_path, monkeypatch, capsys):
    calls = []

    def fake_submit(form, server_url, output_path, timeout):
        calls.append((server_url, form.request_data(), output_path, timeout))
        return tmp_path / "chart.pdf"

    monkeypatch.setattr(chart_position, "submit_chart", fake_submit)
    code = chart_position.main(
        ["-lat", "42.5", "-long", "-71", "--server", "--output", "out.pdf", "--config", str(tmp_path / "none.toml")]
    )
    assert code == 0
    assert calls[0][0] == "http://127.0.0.1:8080/chart"
    assert calls[0][2] == "out.pdf"
    assert "✓ Done!" in capsys.readouterr().out


def test_main_batch_exit_code(tmp_path):
    path = tmp_path / "positions.txt"
    path.write_text("FN42\n", encoding="utf-8")
    assert chart_position.main(["--batch", str(path), "--config", str(tmp_path / "none.toml")]) == 0


def test_configured_size_survives_metric(tmp_path):
    path = tmp_path / "chart.toml"
    path.write_text('[form]\nmetric = true\nsize = "a3"\n', encoding="utf-8")
    config = hamchart.cli.load_config(path)
    form = hamchart.cli.build_form(make_args(locator="FN42"), config)
    assert form.size == "a3"
    assert form.metric
    assert not form.tie_metric_and_size


def test_metric_config_without_size_picks_a4(tmp_path):
    path = tmp_path / "chart.toml"
    path.write_text("[form]\nmetric = true\n", encoding="utf-8")
    form = hamchart.cli.build_form(make_args(locator="FN42"), hamchart.cli.load_config(path))
    assert form.size == "a4"


def test_main_batch_missing_file(tmp_path, capsys):
    code = chart_position.main(["--batch", str(tmp_path / "nope.txt"), "--config", str(tmp_path / "none.toml")])
    assert code == 1
    assert "✗ Error" in capsys.readouterr().out
