from app.config import DEFAULT_DATABASE_URL, Settings


def test_data_dir_holds_the_sqlite_file(tmp_path):
    data_dir = tmp_path / "career-data"
    settings = Settings(database_url=DEFAULT_DATABASE_URL, data_dir=str(data_dir))

    url = settings.sqlalchemy_url()

    assert data_dir.is_dir()
    assert url == f"sqlite:///{(data_dir / 'app.db').resolve()}"


def test_explicit_database_url_wins_over_data_dir(tmp_path):
    explicit = f"sqlite:///{tmp_path / 'explicit.db'}"
    settings = Settings(database_url=explicit, data_dir=str(tmp_path / "unused"))

    assert settings.sqlalchemy_url() == explicit
    assert not (tmp_path / "unused").exists()


def test_blank_database_url_falls_back_to_default():
    settings = Settings(database_url="  ", data_dir=None)

    assert settings.sqlalchemy_url() == DEFAULT_DATABASE_URL
