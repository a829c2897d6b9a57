"""Tests for panelcam/job_parser.py module."""
import pytest

from panelcam.job_parser import ParseError, parse_job, parse_operation, parse_panel, parse_tool
from panelcam.machine import Dialect, MachineProfile
from panelcam.models import (
    ClosedPocketOperation,
    Compensation,
    ContourOperation,
    DEFAULT_TOOLS,
    DrillOperation,
    EntryType,
    ExitType,
    OpenPocketOperation,
    ToolKind,
)


class TestParseOperation:
    """Tests for single operation parsing."""

    def test_drill(self):
        op = parse_operation({'type': 'drill', 'tool': 'drill_5mm', 'x': 10, 'y': 20,
                              'diameter': 5, 'depth': 18, 'through': True})
        assert isinstance(op, DrillOperation)
        assert (op.x, op.y, op.depth) == (10, 20, 18)
        assert op.through is True

    def test_contour_with_entry_exit(self):
        op = parse_operation({
            'type': 'contour', 'tool': 'mill_6mm', 'depth': 12, 'closed': True,
            'multi_pass': True, 'pass_depth': 4, 'compensation': 'right',
            'entry': {'type': 'ramp', 'angle': 3}, 'exit': {'type': 'straight'},
            'path': [[0, 0], [50, 0], [50, 50]],
        })
        assert isinstance(op, ContourOperation)
        assert op.path == ((0, 0), (50, 0), (50, 50))
        assert op.entry.type is EntryType.RAMP
        assert op.entry.angle == 3
        assert op.exit.type is ExitType.STRAIGHT
        assert op.compensation is Compensation.RIGHT

    def test_point_objects(self):
        op = parse_operation({'type': 'closed_pocket', 'tool': 'mill_6mm', 'depth': 5,
                              'path': [{'x': 1, 'y': 2}, {'x': 3, 'y': 4}]})
        assert isinstance(op, ClosedPocketOperation)
        assert op.path == ((1, 2), (3, 4))

    def test_open_pocket_defaults(self):
        op = parse_operation({'type': 'open_pocket', 'tool': 'mill_6mm', 'depth': 5,
                              'path': [[0, 0], [10, 0]]})
        assert isinstance(op, OpenPocketOperation)
        assert op.width == 0
        assert op.multi_pass is False

    @pytest.mark.parametrize('value,expected', [
        ('false', False),
        ('0', False),
        ('true', True),
        (False, False),
        (True, True),
    ])
    def test_through_flag_words(self, value, expected):
        op = parse_operation({'type': 'drill', 'tool': 'drill_5mm', 'x': 0, 'y': 0,
                              'diameter': 5, 'depth': 10, 'through': value})
        assert op.through is expected

    def test_closed_false_string_keeps_contour_open(self):
        op = parse_operation({'type': 'contour', 'tool': 'mill_6mm', 'depth': 5,
                              'closed': 'false', 'multi_pass': 'no',
                              'path': [[0, 0], [10, 0]]})
        assert op.closed is False
        assert op.multi_pass is False

    @pytest.mark.parametrize('value', ['maybe', 2, [True]])
    def test_invalid_flag(self, value):
        with pytest.raises(ParseError, match="Operation 1: 'closed' must be true or false"):
            parse_operation({'type': 'contour', 'tool': 'mill_6mm', 'depth': 5,
                             'closed': value, 'path': [[0, 0]]})

    def test_unknown_type(self):
        with pytest.raises(ParseError, match="Operation 3: unknown type 'engrave'"):
            parse_operation({'type': 'engrave'}, index=2)

    def test_missing_field(self):
        with pytest.raises(ParseError, match="Operation 1: missing 'depth'"):
            parse_operation({'type': 'drill', 'tool': 'drill_5mm', 'x': 0, 'y': 0, 'diameter': 5})

    def test_non_numeric_field(self):
        with pytest.raises(ParseError, match="'depth' must be a number"):
            parse_operation({'type': 'drill', 'tool': 'drill_5mm', 'x': 0, 'y': 0,
                             'diameter': 5, 'depth': 'deep'})

    def test_bad_point(self):
        with pytest.raises(ParseError, match=r"path\[1\]"):
            parse_operation({'type': 'contour', 'tool': 'mill_6mm', 'depth': 5,
                             'path': [[0, 0], 'corner']})

    def test_model_validation_wrapped(self):
        with pytest.raises(ParseError, match="Operation 1:"):
            parse_operation({'type': 'contour', 'tool': 'mill_6mm', 'depth': -5, 'path': [[0, 0]]})


class TestParseToolAndPanel:
    """Tests for tool and panel parsing."""

    def test_tool(self):
        tool = parse_tool({'id': 'v90', 'kind': 'milling_bit', 'diameter': 12,
                           'spindle_speed': 18000, 'feed_rate': 600})
        assert tool.kind is ToolKind.MILLING_BIT
        assert tool.plunge_rate is None
        assert tool.name == 'v90'

    def test_invalid_tool(self):
        with pytest.raises(ParseError, match="Tool 2"):
            parse_tool({'id': 'bad', 'kind': 'drill_bit', 'diameter': 0,
                        'spindle_speed': 1, 'feed_rate': 1}, index=1)

    def test_panel(self):
        panel = parse_panel({'name': 'Door', 'dimensions': {'length': 700, 'width': 400, 'thickness': 19},
                             'origin': 'center'})
        assert panel.name == 'Door'
        assert panel.thickness == 19
        assert panel.origin == 'center'

    def test_panel_missing_dimension(self):
        with pytest.raises(ParseError, match="thickness"):
            parse_panel({'name': 'Door', 'dimensions': {'length': 700, 'width': 400}})


class TestParseJob:
    """Tests for complete job parsing."""

    def test_full_job(self, job_payload):
        job = parse_job(job_payload)

        assert job.panel.name == 'Cabinet side'
        assert [op.kind for op in job.operations] == ['drill', 'contour', 'closed_pocket', 'open_pocket']
        assert [tool.id for tool in job.tools] == ['drill_5mm', 'mill_6mm']
        assert job.profile == MachineProfile()

    def test_default_tools(self, job_payload):
        del job_payload['tools']
        assert parse_job(job_payload).tools == DEFAULT_TOOLS

    def test_all_operation_errors_reported(self, job_payload):
        job_payload['operations'][0]['depth'] = 'x'
        job_payload['operations'][2]['type'] = 'laser'

        with pytest.raises(ParseError) as excinfo:
            parse_job(job_payload)

        lines = str(excinfo.value).split('\n')
        assert len(lines) == 2
        assert lines[0].startswith('Operation 1:')
        assert lines[1].startswith('Operation 3:')

    def test_duplicate_tool_ids(self, job_payload):
        job_payload['tools'].append(dict(job_payload['tools'][0]))
        with pytest.raises(ParseError, match="Duplicate tool id 'drill_5mm'"):
            parse_job(job_payload)

    def test_machine_overrides_default_profile(self, job_payload):
        job_payload['machine'] = {'dialect': 'homag', 'safe_height': 30}
        default = MachineProfile(spindle_speed=12000)

        profile = parse_job(job_payload, default).profile

        assert profile.dialect is Dialect.HOMAG
        assert profile.safe_height == 30
        assert profile.spindle_speed == 12000

    def test_invalid_machine(self, job_payload):
        job_payload['machine'] = {'feed_rate': -5}
        with pytest.raises(ParseError, match="feed_rate"):
            parse_job(job_payload)

    def test_not_an_object(self):
        with pytest.raises(ParseError):
            parse_job(['panel'])

    def test_operations_must_be_list(self, job_payload):
        job_payload['operations'] = {'type': 'drill'}
        with pytest.raises(ParseError, match="'operations' must be a list"):
            parse_job(job_payload)
