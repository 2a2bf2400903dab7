"""Tests for PanelConfig."""

import pytest

from PANELDK.DK import PanelConfig


class TestPanelConfig:
    """Tests for PanelConfig dataclass."""

    def test_default_config(self):
        """Test default configuration values."""
        config = PanelConfig()
        assert config.strategy == "stream"
        assert config.n_partitions == 1
        assert config.n_jobs is None
        assert config.cond_threshold == 1e12

    def test_custom_config(self):
        config = PanelConfig(strategy="materialize", n_partitions=8, n_jobs=-1)
        assert config.strategy == "materialize"
        assert config.n_partitions == 8
        assert config.n_jobs == -1

    def test_invalid_strategy_raises(self):
        with pytest.raises(ValueError, match="strategy must be"):
            PanelConfig(strategy="cached")

    def test_invalid_partitions_raise(self):
        with pytest.raises(ValueError, match="n_partitions must be positive"):
            PanelConfig(n_partitions=0)

    def test_zero_jobs_raise(self):
        with pytest.raises(ValueError, match="n_jobs"):
            PanelConfig(n_jobs=0)

    def test_thresholds_are_ordered(self):
        with pytest.raises(ValueError, match="cond_warn"):
            PanelConfig(cond_threshold=1e6, cond_warn=1e8)
        with pytest.raises(ValueError, match="cond_threshold"):
            PanelConfig(cond_threshold=0.5)
