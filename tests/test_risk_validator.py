import asyncio

import pytest

from strategy_gate.config import RiskSettings
from strategy_gate.exceptions import InvalidRiskLevelError, RiskLimitError
from strategy_gate.validation import RiskValidator


class TestValidateRiskLevel:
    @pytest.mark.parametrize("level", [0, 1, 50.5, 100, "low", "moderate", "Medium", " high "])
    def test_recognized(self, level):
        RiskValidator().validate_risk_level(level)

    @pytest.mark.parametrize(
        ("level", "match"),
        [
            (None, "Risk level is required"),
            ("", "Risk level is required"),
            (-1, "between 0 and 100"),
            (100.01, "between 0 and 100"),
            ("extreme", "Unknown risk level 'extreme'"),
            (True, "must be a number"),
            ([10], "must be a number"),
            (float("nan"), "between 0 and 100"),
        ],
    )
    def test_rejected(self, level, match):
        with pytest.raises(InvalidRiskLevelError, match=match):
            RiskValidator().validate_risk_level(level)

    def test_custom_tiers(self):
        validator = RiskValidator(RiskSettings(min_level=1, max_level=5, named_tiers=("aggressive",), _env_file=None))  # type: ignore[call-arg]
        validator.validate_risk_level(5)
        validator.validate_risk_level("Aggressive")
        with pytest.raises(InvalidRiskLevelError, match="between 1 and 5"):
            validator.validate_risk_level(0)
        with pytest.raises(InvalidRiskLevelError):
            validator.validate_risk_level("low")


class TestAssessRiskLevel:
    def test_valid_level(self):
        check = asyncio.run(RiskValidator().assess_risk_level("moderate"))
        assert check.valid
        assert check.errors == []

    def test_invalid_level(self):
        check = asyncio.run(RiskValidator().assess_risk_level(250))
        assert not check.valid
        assert check.errors == ["Risk level must be between 0 and 100"]


class TestHardLimits:
    def test_max_allocation(self):
        RiskValidator.validate_max_allocation(0)
        RiskValidator.validate_max_allocation(100)
        with pytest.raises(RiskLimitError, match="required"):
            RiskValidator.validate_max_allocation(None)
        with pytest.raises(RiskLimitError, match="must be a number"):
            RiskValidator.validate_max_allocation("10")
        with pytest.raises(RiskLimitError, match="between 0 and 100"):
            RiskValidator.validate_max_allocation(101)

    def test_position_size(self):
        RiskValidator.validate_position_size(0)
        RiskValidator.validate_position_size(2500.0)
        with pytest.raises(RiskLimitError, match="required"):
            RiskValidator.validate_position_size(None)
        with pytest.raises(RiskLimitError, match="must be positive"):
            RiskValidator.validate_position_size(-1)
