from pathlib import Path
from unittest.mock import patch

import pytest

from docfill.output.sink import FilesystemSink


class TestFilesystemSink:
    def test_creates_directory_and_writes_file(self, tmp_path: Path) -> None:
        out = tmp_path / "out" / "letters"
        FilesystemSink(out).deliver("Carta de Cobranca - 12345678000199.pdf", b"%PDF")
        assert (out / "Carta de Cobranca - 12345678000199.pdf").read_bytes() == b"%PDF"

    def test_file_name_cannot_leave_output_dir(self, tmp_path: Path) -> None:
        FilesystemSink(tmp_path).deliver("../../escape.pdf", b"%PDF")
        assert (tmp_path / "escape.pdf").exists()
        assert not (tmp_path.parent / "escape.pdf").exists()

    def test_failed_write_leaves_no_partial_file(self, tmp_path: Path) -> None:
        with patch("docfill.output.sink.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                FilesystemSink(tmp_path).deliver("Carta.pdf", b"%PDF-1.7 ...")
        assert list(tmp_path.iterdir()) == []

    def test_existing_file_survives_failed_overwrite(self, tmp_path: Path) -> None:
        (tmp_path / "Carta.pdf").write_bytes(b"%PDF old")
        with patch("docfill.output.sink.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                FilesystemSink(tmp_path).deliver("Carta.pdf", b"%PDF new")
        assert [p.name for p in tmp_path.iterdir()] == ["Carta.pdf"]
        assert (tmp_path / "Carta.pdf").read_bytes() == b"%PDF old"
