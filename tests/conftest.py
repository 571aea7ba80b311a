from pathlib import Path
import json
import textwrap

import pytest
from typer.testing import CliRunner

from slugsync.fields import FormDocument


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def form() -> FormDocument:
    """
    A small article form: title (source), slug (target) and status.
    """
    document = FormDocument()
    document.add_field("title", "Hello World")
    document.add_field("slug", "")
    document.add_field("status", "published", tag="select")
    return document


@pytest.fixture
def sample_files(tmp_path: Path) -> dict:
    """
    Write a config file and a form snapshot for CLI tests and return their paths.
    """
    config_text = textwrap.dedent(
        """
        source_field = "title"
        target_field = "slug"
        status_field = "status"
        separator = "-"
        lowercase = true
        auto_update_mode = "change"
        """
    ).strip()
    config_path = tmp_path / "slug.toml"
    config_path.write_text(config_text + "\n", encoding="utf-8")

    form_payload = {
        "fields": [
            {"field": "title", "value": "Привет Мир"},
            {"field": "slug", "value": ""},
            {"field": "status", "value": "published", "tag": "select"},
        ]
    }
    form_path = tmp_path / "form.json"
    form_path.write_text(json.dumps(form_payload, ensure_ascii=False), encoding="utf-8")
    return {"config": config_path, "form": form_path}
