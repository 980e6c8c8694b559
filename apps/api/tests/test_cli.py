import json
import uuid
from datetime import date

from click.testing import CliRunner

from immowaechter.cli import cli


def test_seed_intervals_command(db):
    runner = CliRunner()

    first = runner.invoke(cli, ["seed-intervals"])
    second = runner.invoke(cli, ["seed-intervals"])

    assert first.exit_code == 0
    assert "Added 14 maintenance intervals" in first.output
    assert "Added 0 maintenance intervals" in second.output


def test_check_maintenances_command(db, make_owner, make_property, make_component):
    owner = make_owner(email="franz@example.at")
    make_component(prop=make_property(owner=owner), next_maintenance=date(2025, 1, 4))

    result = CliRunner().invoke(cli, ["check-maintenances", "--date", "2025-01-01"])

    assert result.exit_code == 0
    summary = json.loads(result.stdout)
    assert summary["message"] == "Notification check completed"
    assert summary["checked"] == 1
    assert summary["sent"] == 0
    assert summary["errors"] == ["franz@example.at: Email transport not configured (missing RESEND_API_KEY)"]


def test_risk_score_command(db, make_property, make_component):
    prop = make_property()
    make_component(prop=prop, next_maintenance=date(2099, 1, 1))

    result = CliRunner().invoke(cli, ["risk-score", str(prop.id)])

    assert result.exit_code == 0
    assert "Score: 15/100 (low)" in result.output


def test_risk_score_command_unknown_property(db):
    result = CliRunner().invoke(cli, ["risk-score", str(uuid.uuid4())])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_seed_risk_consequences_command(db):
    runner = CliRunner()

    first = runner.invoke(cli, ["seed-risk-consequences"])
    second = runner.invoke(cli, ["seed-risk-consequences"])

    assert first.exit_code == 0
    assert "Added 6 risk consequences" in first.output
    assert "Added 0 risk consequences" in second.output


def test_escalate_critical_command(db, make_owner, make_property, make_component):
    owner = make_owner(email="franz@example.at")
    make_component(prop=make_property(owner=owner), next_maintenance=date(2024, 1, 1))

    result = CliRunner().invoke(cli, ["escalate-critical", "--date", "2025-01-01"])

    assert result.exit_code == 0
    summary = json.loads(result.stdout)
    assert summary["message"] == "Critical maintenance check completed"
    assert summary["checked"] == 1
    assert summary["notificationsSent"] == 0
    assert summary["errors"] == ["franz@example.at: Email transport not configured (missing RESEND_API_KEY)"]
