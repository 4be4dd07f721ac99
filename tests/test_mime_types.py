import pytest

from ezmime.mime_types import DEFAULT_MIME_TYPE, MIME_TYPES, resolve_mime_type


@pytest.mark.parametrize(
    "path, expected",
    [
        ("report.pdf", "application/pdf"),
        ("/var/data/photo.jpg", "image/jpeg"),
        ("logo.png", "image/png"),
        ("sheet.xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
        ("notes.md", "text/markdown"),
        ("song.flac", "audio/flac"),
        ("clip.mkv", "video/x-matroska"),
        ("app.ts", "application/typescript"),
        ("archive.tar.gz", "application/gzip"),
    ],
)
def test_known_extensions(path, expected):
    assert resolve_mime_type(path) == expected


@pytest.mark.parametrize("path", ["README", "photo.PNG", "data.unknownext", "dir.d/file", ""])
def test_unknown_or_missing_extension_falls_back(path):
    assert resolve_mime_type(path) == DEFAULT_MIME_TYPE == "application/octet-stream"


def test_table_is_read_only():
    with pytest.raises(TypeError):
        MIME_TYPES[".new"] = "application/x-new"


def test_table_size_and_keys():
    assert len(MIME_TYPES) > 100
    assert all(ext.startswith(".") for ext in MIME_TYPES)
