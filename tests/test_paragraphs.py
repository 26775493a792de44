from pathlib import Path

import pytest
from phraseindex.text.paragraphs import read_file_into_paragraphs, split_paragraphs

def test_zero_paragraphs(tmp_path: Path):
    p = tmp_path / "empty.txt"
    p.write_text("\n\n   \n", encoding="utf-8")
    assert read_file_into_paragraphs(str(p)) == []

def test_single_paragraph(tmp_path: Path):
    p = tmp_path / "one.txt"
    p.write_text("It is a truth universally acknowledged,\nthat a single man", encoding="utf-8")
    assert len(read_file_into_paragraphs(str(p))) == 1

def test_multiple_paragraphs(tmp_path: Path):
    p = tmp_path / "three.txt"
    p.write_text("first para\n\nsecond para\nstill second\n  \n\nthird\n", encoding="utf-8")
    assert read_file_into_paragraphs(str(p)) == ["first para", "second para\nstill second", "third"]

def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        read_file_into_paragraphs(str(tmp_path / "non_existent_file.txt"))

def test_split_paragraphs_strips():
    assert split_paragraphs("  a  \n \t\n  b ") == ["a", "b"]

def test_invalid_utf8_is_an_error(tmp_path: Path):
    p = tmp_path / "latin1.txt"
    p.write_bytes(b"caf\xe9 au lait")
    with pytest.raises(UnicodeDecodeError):
        read_file_into_paragraphs(str(p))
