"""
CLI tests.

main() is called in-process with an argument list, the way a console script
would call it.
"""

import argparse
import json

import pytest

from cli import create_parser, main, parse_blood_pressure, parse_pain_location
from config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("CONSULTSCRIBE_OUTPUT_DIR", str(tmp_path / "default-output"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_parse_pain_location():
    location = parse_pain_location("lower_back:Lower back")
    assert (location.id, location.label) == ("lower_back", "Lower back")
    assert parse_pain_location("chest").label == "Chest"
    with pytest.raises(argparse.ArgumentTypeError):
        parse_pain_location(":Chest")


def test_parse_blood_pressure():
    assert parse_blood_pressure("120/80") == (120.0, 80.0)
    with pytest.raises(argparse.ArgumentTypeError):
        parse_blood_pressure("120")


def test_parser_collects_repeated_pain_locations():
    args = create_parser().parse_args([
        "--text", "pain", "--pain-location", "chest:Chest", "--pain-location", "head:Head",
    ])
    assert [p.id for p in args.pain_location] == ["chest", "head"]


def test_json_output(capsys):
    exit_code = main([
        "--text", "I have had a fever and cough for 3 days, it is getting worse",
        "--temperature", "101.2",
        "--bp", "120/80",
        "--height", "170",
        "--weight", "65",
        "--pain-location", "chest:Chest",
        "--json", "--no-save", "--no-translate",
    ])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["status"] == "draft"
    assert data["vitals"]["bmi"] == 22.5
    note = data["soapNote"]
    assert note["subjective"]["symptoms"] == ["Fever", "Cough"]
    assert note["subjective"]["painLocations"] == [{"id": "chest", "label": "Chest"}]
    assert note["objective"]["vitals"] == (
        "Temp: 101.2°F | BP: 120/80 mmHg | Ht: 170cm, Wt: 65kg | BMI: 22.5"
    )
    assert note["riskAssessment"]["level"] == "MEDIUM"


def test_file_input_is_saved(tmp_path, capsys):
    transcript = tmp_path / "consultation.txt"
    transcript.write_text("I have chest pain since morning", encoding="utf-8")
    output_dir = tmp_path / "notes"

    exit_code = main([str(transcript), "--output", str(output_dir), "--no-banner"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "SOAP NOTE" in out
    assert "Risk: HIGH" in out
    assert len(list(output_dir.glob("consultation_*.json"))) == 1
    assert len(list(output_dir.glob("consultation_*_soap.txt"))) == 1
    assert len(list(output_dir.glob("consultation_*_transcript.txt"))) == 1


def test_empty_transcript_fails(capsys):
    assert main(["--text", "   ", "--no-save", "--quiet"]) == 1
    assert "Transcript is empty" in capsys.readouterr().err


def test_missing_file_fails(tmp_path, capsys):
    assert main([str(tmp_path / "nope.txt"), "--no-save", "--quiet"]) == 1
    err = capsys.readouterr().err
    assert "File error" in err
    assert "nope.txt" in err


def test_unwritable_output_fails(tmp_path, capsys):
    # a regular file where the output directory should be
    blocker = tmp_path / "notes"
    blocker.write_text("", encoding="utf-8")

    exit_code = main(["--text", "I have fever", "--output", str(blocker), "--quiet"])

    assert exit_code == 1
    err = capsys.readouterr().err
    assert "File error" in err
    assert "transcript" not in err


def test_input_is_required():
    with pytest.raises(SystemExit) as exc_info:
        main(["--no-banner"])
    assert exc_info.value.code == 2
