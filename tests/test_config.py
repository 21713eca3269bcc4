import yaml

from market_scout.utils.config import Config, ConfigManager


def write_config(path, data):
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
    return path


def test_missing_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    config = ConfigManager(tmp_path / "absent.yaml").config

    assert config == Config()
    assert config.currency.code == "SAR"
    assert config.profitability.monthly_fixed_costs == 2000
    assert config.report.default_language == "en"


def test_yaml_values_are_loaded(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = write_config(
        tmp_path / "config.yaml",
        {
            "currency": {"code": "AED", "suffix": "د.إ"},
            "profitability": {"fallback_price": 80},
            "opportunity": {"content_max_rating": 4.0},
        },
    )

    config = ConfigManager(path).config

    assert config.currency.code == "AED"
    assert config.profitability.fallback_price == 80
    assert config.profitability.product_cost_percent == 0.40
    assert config.opportunity.content_max_rating == 4.0


def test_environment_overrides_yaml(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MARKET_SCOUT_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("MARKET_SCOUT_REPORT_LANGUAGE", "ar")
    path = write_config(
        tmp_path / "config.yaml",
        {"logging": {"level": "WARNING"}, "report": {"default_language": "en"}},
    )

    config = ConfigManager(path).config

    assert config.logging.level == "DEBUG"
    assert config.report.default_language == "ar"


def test_dumped_config_drives_scorers(tmp_path, monkeypatch):
    from market_scout.scoring import ProfitabilityCalculator

    monkeypatch.chdir(tmp_path)
    path = write_config(tmp_path / "config.yaml", {"profitability": {"fallback_price": 200}})

    calculator = ProfitabilityCalculator(ConfigManager(path).config.model_dump())

    assert calculator.calculate({}, [], 50).average_sale_price == 200
