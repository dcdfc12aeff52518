from pathlib import Path

import pytest

from docfill.config.settings import Settings


@pytest.fixture()
def template_root(tmp_path: Path) -> Path:
    root = tmp_path / "templates"
    (root / "notificação").mkdir(parents=True)
    return root


@pytest.fixture()
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "output"


@pytest.fixture()
def test_settings(template_root: Path, output_dir: Path) -> Settings:
    return Settings(
        template_source="filesystem",
        template_root=str(template_root),
        output_dir=str(output_dir),
        layout_engine="pdfplumber",
        company_placeholder="ACME LTDA",
        log_level="DEBUG",
    )
