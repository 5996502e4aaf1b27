"""Tests for the song-presenter CLI commands."""

import json

import pytest
from typer.testing import CliRunner

from song_presenter import __version__
from song_presenter.cli.main import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    """Config that keeps the session log inside tmp_path."""
    path = tmp_path / "config.toml"
    path.write_text(f'[log]\nlog_dir = "{(tmp_path / "logs").as_posix()}"\n')
    return path


@pytest.fixture
def song_file(tmp_path):
    lyrics = "\n".join(f"Verse one {i}" for i in range(1, 7)) + "\n\n" + "\n".join(
        f"Verse two {i}" for i in range(1, 7)
    )
    path = tmp_path / "song.json"
    path.write_text(json.dumps({"id": "s1", "name": "Verse Song", "lyrics": lyrics, "meaning": "Meaning"}))
    return path


@pytest.fixture
def template_file(tmp_path):
    path = tmp_path / "template.json"
    path.write_text(json.dumps({"name": "Frame", "slides": [{"id": "intro"}, {"id": "ref"}, {"id": "outro"}], "referenceSlideIndex": 1}))
    return path


@pytest.fixture
def songs_dir(tmp_path):
    directory = tmp_path / "songs"
    directory.mkdir()
    (directory / "a.json").write_text(json.dumps({"id": "a", "name": "A", "lyrics": "A1\nA2"}))
    (directory / "b.json").write_text(json.dumps({"id": "b", "name": "B", "lyrics": "B1"}))
    return directory


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestDeckCommand:
    """Tests for 'deck' command."""

    def test_deck_json(self, song_file, template_file, config_file):
        """Verify the framed deck is printed as JSON records."""
        result = runner.invoke(
            app,
            ["deck", str(song_file), "--template", str(template_file), "--json", "--config", str(config_file)],
        )

        assert result.exit_code == 0, result.output
        slides = json.loads(result.output)
        assert [s["slide_type"] for s in slides] == ["static", "song", "song", "static"]
        assert slides[1]["next_is_continuation"] is True
        assert slides[0]["template_slide"] == {"id": "intro"}

    def test_deck_table(self, song_file, config_file):
        result = runner.invoke(
            app,
            ["deck", str(song_file), "--singer", "Asha", "--pitch", "C major", "--config", str(config_file)],
        )

        assert result.exit_code == 0, result.output
        assert "2 slide(s)" in result.output

    def test_deck_writes_session_log(self, song_file, config_file, tmp_path):
        runner.invoke(app, ["deck", str(song_file), "--config", str(config_file)])

        assert (tmp_path / "logs" / "song_presenter.log").exists()

    def test_missing_song(self, tmp_path, config_file):
        result = runner.invoke(app, ["deck", str(tmp_path / "nope.json"), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Error loading song" in result.output

    def test_song_with_non_text_lyrics(self, tmp_path, config_file):
        path = tmp_path / "song.json"
        path.write_text(json.dumps({"name": "X", "lyrics": ["a", "b"]}))

        result = runner.invoke(app, ["deck", str(path), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Error loading song" in result.output
        assert not isinstance(result.exception, AttributeError)

    def test_bad_template(self, song_file, tmp_path, config_file):
        bad = tmp_path / "bad.json"
        bad.write_text("{")

        result = runner.invoke(app, ["deck", str(song_file), "--template", str(bad), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Error loading template" in result.output

    def test_missing_config(self, song_file, tmp_path):
        result = runner.invoke(app, ["deck", str(song_file), "--config", str(tmp_path / "none.toml")])

        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestSessionCommand:
    """Tests for 'session' command."""

    def test_csv_session_json(self, tmp_path, songs_dir, template_file, config_file):
        session = tmp_path / "session.csv"
        session.write_text("songId,songName,singerId,singerName,pitch\na,A,,Asha,C\nb,B,,Ben,G minor\n")

        result = runner.invoke(
            app,
            [
                "session",
                str(session),
                "--songs-dir",
                str(songs_dir),
                "--template",
                str(template_file),
                "--json",
                "--config",
                str(config_file),
            ],
        )

        assert result.exit_code == 0, result.output
        slides = json.loads(result.output)
        assert [s["song_name"] for s in slides] == ["A", "A", "B", "B"]
        assert slides[1]["next_song_name"] == "B"
        assert slides[1]["next_pitch"] == "G minor"
        assert slides[2]["session_song_index"] == 2

    def test_export_csv(self, tmp_path, songs_dir, config_file):
        session = tmp_path / "session.json"
        session.write_text(json.dumps([{"song_id": "a", "singer_name": "Asha"}]))
        backup = tmp_path / "out" / "backup.csv"

        result = runner.invoke(
            app,
            ["session", str(session), "-d", str(songs_dir), "--export-csv", str(backup), "--config", str(config_file)],
        )

        assert result.exit_code == 0, result.output
        assert backup.read_text().splitlines()[1] == "a,A,,Asha,"

    def test_unknown_song(self, tmp_path, songs_dir, config_file):
        session = tmp_path / "session.json"
        session.write_text(json.dumps([{"song_name": "Missing"}]))

        result = runner.invoke(app, ["session", str(session), "-d", str(songs_dir), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "song not found" in result.output

    def test_empty_session(self, tmp_path, config_file):
        session = tmp_path / "session.json"
        session.write_text("[]")

        result = runner.invoke(app, ["session", str(session), "--config", str(config_file)])

        assert result.exit_code == 0
        assert "no songs" in result.output


class TestConfigCommand:
    """Tests for 'config' command."""

    def test_path(self, config_file):
        result = runner.invoke(app, ["config", "path", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "config.toml" in result.output

    def test_set_and_show(self, config_file):
        result = runner.invoke(app, ["config", "set", "deck.prepend_title", "true", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "Set deck.prepend_title = True" in result.output

        result = runner.invoke(app, ["config", "show", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "Prepend title: True" in result.output

    def test_set_invalid_key(self, config_file):
        result = runner.invoke(app, ["config", "set", "deck.colour", "blue", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Invalid config key" in result.output

    def test_set_without_value(self, config_file):
        result = runner.invoke(app, ["config", "set", "--config", str(config_file)])

        assert result.exit_code == 1

    def test_unknown_action(self, config_file):
        result = runner.invoke(app, ["config", "frobnicate", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Unknown action" in result.output
