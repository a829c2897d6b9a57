"""Tests for panelcam/machine.py module."""
import pytest

from panelcam.machine import (
    DIALECT_SYNTAX,
    Dialect,
    InvalidProfile,
    MachineProfile,
    get_syntax,
)


class TestDialect:
    """Tests for dialect lookup."""

    @pytest.mark.parametrize('name,expected', [
        ('generic', Dialect.GENERIC),
        ('BIESSE', Dialect.BIESSE),
        (' Homag ', Dialect.HOMAG),
        ('scm', Dialect.SCM),
        ('grbl', Dialect.GRBL),
    ])
    def test_from_name(self, name, expected):
        assert Dialect.from_name(name) is expected

    def test_unknown_name_falls_back(self, caplog):
        with caplog.at_level('WARNING', logger='panelcam'):
            assert Dialect.from_name('heidenhain') is Dialect.GENERIC
        assert 'heidenhain' in caplog.text

    @pytest.mark.parametrize('name', [5, 3.5, ['scm']])
    def test_non_string_falls_back(self, name):
        assert Dialect.from_name(name) is Dialect.GENERIC

    def test_none_falls_back(self):
        assert Dialect.from_name(None) is Dialect.GENERIC

    def test_every_dialect_has_syntax(self):
        assert set(DIALECT_SYNTAX) == set(Dialect)

    def test_vendor_spellings(self):
        assert get_syntax(Dialect.HOMAG).rapid == 'G00'
        assert get_syntax(Dialect.HOMAG).linear == 'G01'
        assert get_syntax(Dialect.SCM).comment_open == '('
        assert get_syntax(Dialect.SCM).comment_close == ')'
        assert get_syntax(Dialect.GRBL) == get_syntax(Dialect.GENERIC)
        assert not get_syntax(Dialect.BIESSE).inline_comments


class TestMachineProfile:
    """Tests for machine profile construction."""

    def test_defaults(self, profile):
        assert profile.dialect is Dialect.GENERIC
        assert profile.safe_height == 10
        assert profile.spindle_speed == 18000
        assert profile.feed_rate == 800
        assert profile.plunge_rate == 300
        assert profile.use_tool_compensation is False
        assert profile.use_tool_rates is True

    @pytest.mark.parametrize('field_name', ['safe_height', 'spindle_speed', 'feed_rate', 'plunge_rate'])
    def test_non_positive_values_rejected(self, field_name):
        with pytest.raises(InvalidProfile):
            MachineProfile(**{field_name: 0})

    def test_from_mapping_fills_from_defaults(self):
        base = MachineProfile(dialect='homag', safe_height=20)
        profile = MachineProfile.from_mapping({'feed_rate': 1200}, base)

        assert profile.dialect is Dialect.HOMAG
        assert profile.safe_height == 20
        assert profile.feed_rate == 1200

    def test_from_mapping_parses_booleans(self):
        profile = MachineProfile.from_mapping({'use_tool_compensation': 'yes', 'use_tool_rates': 'false'})
        assert profile.use_tool_compensation is True
        assert profile.use_tool_rates is False

    def test_from_mapping_rejects_unknown_flag_words(self):
        with pytest.raises(InvalidProfile):
            MachineProfile.from_mapping({'use_tool_compensation': 'sometimes'})

    def test_from_mapping_numeric_dialect(self):
        assert MachineProfile.from_mapping({'dialect': 5}).dialect is Dialect.GENERIC

    def test_from_mapping_wraps_bad_numbers(self):
        with pytest.raises(InvalidProfile):
            MachineProfile.from_mapping({'safe_height': 'high'})

    def test_from_config(self):
        config = {
            'MACHINE_DIALECT': 'scm',
            'MACHINE_SAFE_HEIGHT': 15.0,
            'MACHINE_USE_TOOL_COMPENSATION': 'true',
            'SECRET_KEY': 'ignored',
        }
        profile = MachineProfile.from_config(config)

        assert profile.dialect is Dialect.SCM
        assert profile.safe_height == 15
        assert profile.use_tool_compensation is True
        assert profile.feed_rate == 800

    def test_to_dict(self):
        data = MachineProfile(dialect='biesse').to_dict()
        assert data['dialect'] == 'biesse'
        assert MachineProfile.from_mapping(data) == MachineProfile(dialect='biesse')
