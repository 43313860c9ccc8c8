"""Tests for utility helpers."""

from __future__ import annotations

from mdblocks.utils import md5_hash


class TestMd5Hash:
    def test_known_digest(self):
        assert md5_hash("hello") == "5d41402abc4b2a76b9719d911017c592"

    def test_unicode(self):
        assert md5_hash("héllo") == md5_hash("héllo")
        assert md5_hash("héllo") != md5_hash("hello")

    def test_lone_surrogate_does_not_raise(self):
        assert len(md5_hash("\ud800")) == 32
