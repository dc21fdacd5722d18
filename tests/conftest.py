"""
Pytest fixtures for the local RAG pipeline.

The database is replaced by FakeConnection, which understands the handful of
statements the pipeline issues. ai.ollama_embed is emulated with a hashed
bag-of-words vector so cosine distances are deterministic.
"""

import dataclasses
import hashlib
import math
import re

import pytest

from localrag.settings import Settings

FAKE_DIM = 64


def fake_embed(text):
    vec = [0.0] * FAKE_DIM
    for word in re.findall(r"[a-z0-9]+", text.lower()):
        idx = int(hashlib.md5(word.encode()).hexdigest(), 16) % FAKE_DIM
        vec[idx] += 1.0
    vec[0] += 0.5  # never a zero vector
    return vec


def cosine_distance(a, b):
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return 1.0 - dot / norm


class FakeCursor:
    def __init__(self, rows=None):
        self._rows = rows or []

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    def __init__(self, has_embed=True, generate_payload='{"response": "ok"}',
                 extension_error=None):
        self.has_embed = has_embed
        # str, None, or callable(prompt) -> str
        self.generate_payload = generate_payload
        self.extension_error = extension_error
        self.rows = []
        self.statements = []
        self.timeouts = []
        self.table_created = False
        self.prompts = []

    def execute(self, sql, params=None):
        self.statements.append(sql)
        text = " ".join(sql.split())

        if "set_config('statement_timeout'" in text:
            self.timeouts.append(int(params[0]))
            return FakeCursor([(params[0],)])
        if text.startswith("CREATE EXTENSION"):
            if self.extension_error is not None:
                raise self.extension_error
            return FakeCursor()
        if "FROM pg_proc" in text:
            return FakeCursor([(1 if self.has_embed else 0,)])
        if text.startswith("CREATE TABLE"):
            self.table_created = True
            return FakeCursor()
        if text.startswith("TRUNCATE"):
            self.rows = []
            return FakeCursor()
        if text.startswith("INSERT INTO documents"):
            assert self.table_created, "insert before CREATE TABLE"
            title, content, _model, embed_text, _host = params
            self.rows.append((title, content, fake_embed(embed_text)))
            return FakeCursor()
        if text.startswith("SELECT count(*) FROM documents"):
            return FakeCursor([(len(self.rows),)])
        if text.startswith("WITH query_vec"):
            qv = fake_embed(params["query"])
            ranked = sorted(
                ((t, c, cosine_distance(e, qv)) for t, c, e in self.rows),
                key=lambda r: r[2])
            return FakeCursor(ranked[:params["limit"]])
        if "ai.ollama_generate" in text:
            prompt = params[1]
            self.prompts.append(prompt)
            payload = self.generate_payload
            if callable(payload):
                payload = payload(prompt)
            return FakeCursor([(payload,)])
        raise AssertionError(f"unexpected SQL: {text}")

    def executed(self, prefix):
        return [s for s in self.statements if " ".join(s.split()).startswith(prefix)]


@pytest.fixture
def fake_conn():
    return FakeConnection()


@pytest.fixture
def test_settings(tmp_path):
    return dataclasses.replace(
        Settings(),
        source="sample",
        images_dir=str(tmp_path / "images"),
        inference_dir=str(tmp_path / "inference"),
        query="Tell me about gates in South Korea.",
        top_k=3,
    )


@pytest.fixture
def images_dir(tmp_path):
    """Folder with three PNGs, a BMP, and files that must be ignored"""
    from PIL import Image

    folder = tmp_path / "images"
    folder.mkdir()
    for name in ("a_gate.png", "b_blank.png", "c_tower.jpg", "d_palace.BMP"):
        Image.new("RGB", (40, 20), "white").save(folder / name)
    (folder / "notes.txt").write_text("not an image")
    (folder / "scan.pdf").write_bytes(b"%PDF-1.4")
    (folder / "nested").mkdir()
    return folder
