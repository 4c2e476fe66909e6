"""Tests for settings and configuration dataclasses."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from depsolve_cache.config import CacheConfig, Settings


class TestSettings:
    """Tests for environment-driven Settings."""

    def test_defaults(self, monkeypatch):
        for var in ("CACHE_ROOT", "CACHE_MAX_SIZE", "RESULT_CACHE_TTL", "DISTRO_NAMES"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings()

        assert settings.cache_root == "/var/cache/osbuild-depsolve"
        assert settings.cache_max_size == 1024 * 1024 * 1024
        assert settings.result_cache_ttl == 60
        assert settings.distro_names == []

    def test_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CACHE_ROOT", str(tmp_path))
        monkeypatch.setenv("CACHE_MAX_SIZE", "2048")
        monkeypatch.setenv("RESULT_CACHE_TTL", "5.5")
        monkeypatch.setenv("DISTRO_NAMES", '["fedora-40", "fedora-41"]')

        settings = Settings()

        assert settings.cache_root_path == tmp_path.resolve()
        assert settings.cache_max_size == 2048
        assert settings.result_cache_ttl == 5.5
        assert settings.distro_names == ["fedora-40", "fedora-41"]

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValidationError):
            Settings(cache_max_size=0)

    def test_rejects_negative_ttl(self):
        with pytest.raises(ValidationError):
            Settings(result_cache_ttl=-1)


class TestCacheConfig:
    """Tests for CacheConfig."""

    def test_create_with_defaults(self):
        config = CacheConfig()

        assert config.root == Path("/var/cache/osbuild-depsolve")
        assert config.max_size == 1024 * 1024 * 1024
        assert config.result_ttl == 60
        assert config.distro_names == ()

    def test_from_settings(self, tmp_path):
        settings = Settings(
            cache_root=str(tmp_path),
            cache_max_size=4096,
            result_cache_ttl=30,
            distro_names=["rhel-9.4"],
        )

        config = CacheConfig.from_settings(settings)

        assert config.root == tmp_path.resolve()
        assert config.max_size == 4096
        assert config.result_ttl == 30
        assert config.distro_names == ("rhel-9.4",)

    def test_immutability(self):
        config = CacheConfig()

        with pytest.raises(Exception):  # FrozenInstanceError
            config.max_size = 1
