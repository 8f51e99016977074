from pathlib import Path

import pytest

from pagesmith.core.config import (
    DEFAULT_MARGIN,
    PIXELS_PER_INCH,
    PagesmithConfig,
    PageConfig,
    load_config,
)
from pagesmith.core.exceptions import ConfigError


def test_defaults() -> None:
    config = PagesmithConfig()

    assert config.page.margin == DEFAULT_MARGIN == 50
    assert config.page.settle_seconds == 2.0
    assert config.page.width == "8.5in"
    assert config.page.height == "11in"
    assert config.page.print_background is True
    assert config.highlight.style == "monokai"
    assert config.template == "default"
    assert config.keep_html is False


def test_margin_is_converted_at_96_pixels_per_inch() -> None:
    assert PIXELS_PER_INCH == 96
    assert PageConfig(margin=72).margin_inches == pytest.approx(0.75)
    assert PageConfig(margin=0).margin_inches == 0


def test_load_config_without_path_returns_defaults() -> None:
    assert load_config() == PagesmithConfig()


def test_load_config_reads_yaml(tmp_path: Path) -> None:
    path = tmp_path / "pagesmith.yml"
    path.write_text(
        "page:\n  margin: 72\n  landscape: true\nhighlight:\n  style: friendly\nlang: de\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.page.margin == 72
    assert config.page.landscape is True
    assert config.page.settle_seconds == 2.0
    assert config.highlight.style == "friendly"
    assert config.lang == "de"


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == PagesmithConfig()


@pytest.mark.parametrize(
    "content",
    [
        "page: [unclosed\n",
        "- just\n- a list\n",
        "unknown_option: 1\n",
        "page:\n  margin: -5\n",
        "highlight:\n  style: no-such-style\n",
    ],
)
def test_invalid_config_files(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bad.yml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_config(path)

    assert excinfo.value.path == path
    assert excinfo.value.stage == "config"


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yml")


def test_overrides_apply_dotted_keys_and_skip_none() -> None:
    base = PagesmithConfig()
    updated = base.with_overrides(
        **{"page.margin": 10, "page.settle_seconds": None, "template": None, "keep_html": True}
    )

    assert updated.page.margin == 10
    assert updated.page.settle_seconds == 2.0
    assert updated.template == "default"
    assert updated.keep_html is True
    assert base.page.margin == 50


def test_invalid_override_is_a_config_error() -> None:
    with pytest.raises(ConfigError):
        PagesmithConfig().with_overrides(**{"highlight.style": "no-such-style"})
