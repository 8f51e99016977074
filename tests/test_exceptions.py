from pathlib import Path

import pytest

from pagesmith.core.exceptions import (
    ArtifactIOError,
    CaptureError,
    ConfigError,
    EngineLaunchError,
    HighlightError,
    NavigationError,
    PagesmithError,
    PdfError,
    RenderError,
    SourceReadError,
    TemplateError,
)


@pytest.mark.parametrize(
    ("error_type", "stage"),
    [
        (SourceReadError, "read"),
        (HighlightError, "highlight"),
        (RenderError, "render"),
        (TemplateError, "render"),
        (ConfigError, "config"),
        (EngineLaunchError, "pdf"),
        (NavigationError, "pdf"),
        (CaptureError, "pdf"),
        (ArtifactIOError, "pdf"),
    ],
)
def test_errors_report_their_stage(error_type: type[PagesmithError], stage: str) -> None:
    error = error_type("failure")
    assert isinstance(error, PagesmithError)
    assert error.stage == stage
    assert str(error) == "failure"


def test_engine_errors_share_a_base() -> None:
    for error_type in (EngineLaunchError, NavigationError, CaptureError, ArtifactIOError):
        assert issubclass(error_type, PdfError)


def test_path_is_normalised() -> None:
    error = SourceReadError("missing", path="docs/readme.md")
    assert error.path == Path("docs/readme.md")
    assert SourceReadError("missing").path is None
