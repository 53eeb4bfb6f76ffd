from order_dashboard.config import get_config, set_config_for_test
from order_dashboard.backend.connection_store import ConnectionStore
from order_dashboard.data.backends.storage import InMemoryStorage
from order_dashboard.logger import configure_logging, get_logger, mask_secret


def test_defaults():
    set_config_for_test()
    config = get_config()
    assert config.page_size == 100
    assert config.api_namespace == "/wp-json/order-dashboard/v1"
    assert config.token_header == "X-Order-Dashboard-Token"
    assert config.connection_key == "wooCommerceConfig"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PAGE_SIZE", "25")
    monkeypatch.setenv("STORAGE_KIND", "memory")
    set_config_for_test()
    assert get_config().page_size == 25
    assert get_config().storage_kind == "memory"


def test_mask_secret():
    assert mask_secret(None) == ""
    assert mask_secret("short") == "*****"
    assert mask_secret("abcd12345678wxyz") == "abcd********wxyz"


def test_get_logger_follows_log_level(capsys):
    set_config_for_test(log_level="ERROR")
    log = get_logger("order_dashboard.tests")
    log.warning("below the threshold")
    log.error("above the threshold")

    err = capsys.readouterr().err
    assert "above the threshold" in err
    assert "order_dashboard.tests" in err
    assert "below the threshold" not in err


def test_configure_logging_explicit_level(capsys):
    assert configure_logging("debug") == "DEBUG"
    get_logger().debug("debug line")
    assert "debug line" in capsys.readouterr().err
    configure_logging()


def test_saved_token_is_masked_in_logs(capsys, connection):
    set_config_for_test(log_level="INFO")
    get_logger()
    ConnectionStore(InMemoryStorage()).save(connection)

    err = capsys.readouterr().err
    assert "secr*********1234" in err
    assert connection.token not in err
