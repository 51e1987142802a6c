import pytest
from pydantic import ValidationError

from jumpshard.bootstrap.config.loader import get_configfile
from jumpshard.bootstrap.config.settings import JumpShardSettings, build_router, load_settings
from jumpshard.core.digest import MD5Digest, XXH3Digest, XXHash64Digest


@pytest.mark.ut
def test_defaults():
    settings = load_settings()
    assert settings.digest.algorithm == "xxh64"
    assert settings.digest.seed == 0
    assert settings.log.level == "INFO"


@pytest.mark.ut
def test_env_overrides(monkeypatch):
    monkeypatch.setenv("JUMPSHARD_DIGEST__ALGORITHM", "md5")
    monkeypatch.setenv("JUMPSHARD_DIGEST__SEED", "42")
    monkeypatch.setenv("JUMPSHARD_LOG__LEVEL", "debug")
    settings = JumpShardSettings()
    assert settings.digest.algorithm == "md5"
    assert settings.digest.seed == 42
    assert settings.log.level == "DEBUG"


@pytest.mark.ut
def test_yaml_file(tmp_path):
    configfile = tmp_path / "custom.yaml"
    configfile.write_text(
        "digest:\n"
        "  algorithm: xxh3\n"
        "  seed: 7\n"
        "log:\n"
        "  level: WARNING\n"
    )
    settings = load_settings(configfile)
    assert settings.digest.algorithm == "xxh3"
    assert settings.digest.seed == 7
    assert settings.log.level == "WARNING"


@pytest.mark.ut
def test_env_beats_yaml(tmp_path, monkeypatch):
    configfile = tmp_path / "custom.yaml"
    configfile.write_text("digest:\n  algorithm: xxh3\n")
    monkeypatch.setenv("JUMPSHARD_DIGEST__ALGORITHM", "blake2b")
    assert load_settings(configfile).digest.algorithm == "blake2b"


@pytest.mark.ut
def test_overrides_beat_yaml_and_keep_other_fields(tmp_path):
    configfile = tmp_path / "custom.yaml"
    configfile.write_text("digest:\n  algorithm: xxh3\n  seed: 9\n")
    settings = load_settings(configfile, digest={"algorithm": "md5"})
    assert settings.digest.algorithm == "md5"
    assert settings.digest.seed == 9


@pytest.mark.ut
@pytest.mark.parametrize("env,value", [
    ("JUMPSHARD_DIGEST__ALGORITHM", "crc32"),
    ("JUMPSHARD_DIGEST__SEED", "-1"),
    ("JUMPSHARD_DIGEST__SEED", str(2**64)),
    ("JUMPSHARD_LOG__LEVEL", "LOUD"),
])
def test_invalid_values_rejected(monkeypatch, env, value):
    monkeypatch.setenv(env, value)
    with pytest.raises(ValidationError):
        JumpShardSettings()


@pytest.mark.ut
def test_build_router_from_settings():
    router = build_router(load_settings(digest={"algorithm": "md5", "seed": 5}))
    assert isinstance(router.digest, MD5Digest)
    assert router.digest.seed == 5

    assert isinstance(build_router(load_settings()).digest, XXHash64Digest)
    assert isinstance(build_router(load_settings(digest={"algorithm": "xxh3"})).digest, XXH3Digest)


@pytest.mark.ut
def test_configfile_absent_by_default():
    assert get_configfile() is None


@pytest.mark.ut
def test_configfile_in_working_directory(tmp_path):
    configfile = tmp_path / "jumpshard.yaml"
    configfile.write_text("log:\n  level: ERROR\n")
    assert get_configfile().resolve() == configfile.resolve()


@pytest.mark.ut
def test_configfile_from_env(tmp_path, monkeypatch):
    configfile = tmp_path / "other.yaml"
    configfile.write_text("")
    monkeypatch.setenv("JUMPSHARD_CONFIG", str(configfile))
    assert get_configfile().resolve() == configfile.resolve()


@pytest.mark.ut
def test_cli_path_beats_env(tmp_path, monkeypatch):
    configfile = tmp_path / "cli.yaml"
    configfile.write_text("")
    monkeypatch.setenv("JUMPSHARD_CONFIG", str(tmp_path / "missing.yaml"))
    assert get_configfile(str(configfile)) == configfile


@pytest.mark.ut
def test_missing_configfile_exits(tmp_path):
    with pytest.raises(SystemExit):
        get_configfile(str(tmp_path / "missing.yaml"))
