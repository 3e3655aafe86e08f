import json

import pytest
from click.testing import CliRunner

import cli as cli_module
from cli import cli
from config import settings
from conftest import FakeLLMClient, assessment_json, make_pdf

JOB = "Senior Python developer with FastAPI and PostgreSQL"


@pytest.fixture
def profiles_dir(tmp_path):
    directory = tmp_path / "profiles"
    directory.mkdir()
    for name, line in (("alice.pdf", "Alice Martin"), ("bob.pdf", "Bob Stone")):
        (directory / name).write_bytes(make_pdf(
            f"{line} - Backend Engineer",
            "Seven years of Python, FastAPI and PostgreSQL in production",
            "Led the migration of a monolith to event driven services",
        ))
    return directory


@pytest.fixture
def llm(monkeypatch):
    """Patch the CLI's model client; returns the fake for inspection."""
    fake = FakeLLMClient()
    monkeypatch.setattr(cli_module, "build_llm_client", lambda s: fake)
    monkeypatch.setattr(settings, "inter_call_delay_seconds", 0)
    monkeypatch.setattr(settings, "extraction_api_key", "")
    monkeypatch.setattr(settings, "empty_store_policy", "error")
    return fake


def test_rank_json_output(profiles_dir, llm):
    llm.responses = [assessment_json(55, name="Alice"), assessment_json(88, name="Bob")]

    result = CliRunner().invoke(cli, ["rank", "-p", str(profiles_dir), "-j", JOB, "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["total_analyzed"] == 2
    assert [c["filename"] for c in data["all_candidates"]] == ["bob.pdf", "alice.pdf"]
    assert "Alice Martin - Backend Engineer" in llm.prompts[0]


def test_rank_table_output(profiles_dir, llm):
    llm.responses = [assessment_json(55, name="Alice"), "not json"]

    result = CliRunner().invoke(cli, ["rank", "--profiles-dir", str(profiles_dir), "--job-description", JOB])

    assert result.exit_code == 0, result.output
    assert "Analysed 2 profile(s)" in result.output
    assert "*  1.  55/100" in result.output
    assert "[degraded]" in result.output


def test_rank_reads_job_description_file(profiles_dir, llm, tmp_path):
    job_file = tmp_path / "job.txt"
    job_file.write_text(JOB, encoding="utf-8")
    llm.responses = [assessment_json(10), assessment_json(20)]

    result = CliRunner().invoke(cli, ["rank", "-p", str(profiles_dir), "-f", str(job_file), "--json"])

    assert result.exit_code == 0, result.output
    assert JOB in llm.prompts[0]


def test_rank_requires_job_description(profiles_dir, llm):
    result = CliRunner().invoke(cli, ["rank", "-p", str(profiles_dir)])
    assert result.exit_code == 2
    assert "Provide --job-description" in result.output
    assert llm.prompts == []


def test_rank_blank_job_description_is_usage_error(profiles_dir, llm):
    result = CliRunner().invoke(cli, ["rank", "-p", str(profiles_dir), "-j", "   "])
    assert result.exit_code == 2
    assert "Job description is required" in result.output


def test_rank_empty_directory(tmp_path, llm):
    result = CliRunner().invoke(cli, ["rank", "-p", str(tmp_path), "-j", JOB])
    assert result.exit_code == 2
    assert "No candidate PDF files" in result.output


def test_rank_without_credentials(profiles_dir, llm):
    llm.configured = False
    result = CliRunner().invoke(cli, ["rank", "-p", str(profiles_dir), "-j", JOB])
    assert result.exit_code == 2
    assert "GEMINI_API_KEY" in result.output
