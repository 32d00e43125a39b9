import pytest

from main import build_settings, parse_args
from settings import Settings


def test_parse_defaults():
    args = parse_args([])
    assert args.theme is None
    assert args.speed is None
    assert args.log_level == "WARNING"


def test_overrides_are_saved():
    settings = build_settings(parse_args(["--theme", "light", "--speed", "250"]))
    assert settings.theme == "light"
    assert settings.anim_speed == 250
    assert Settings().anim_speed == 250


def test_rejects_bad_theme():
    with pytest.raises(SystemExit):
        parse_args(["--theme", "neon"])


@pytest.mark.parametrize("speed", ["-5", "0"])
def test_rejects_non_positive_speed(speed):
    with pytest.raises(SystemExit):
        build_settings(parse_args(["--speed", speed]))
    assert Settings().anim_speed == 800


def test_no_overrides_leaves_file_alone(tmp_path):
    build_settings(parse_args([]))
    assert not (tmp_path / "settings.json").exists()
