"""
Unit tests for configuration loading and JSON serialization.
"""

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import numpy as np
import pytest  # pyright: ignore[reportMissingImports]
import yaml

sys.path.insert(0, str(Path(__file__).parent.parent))

from gesture_analysis import GestureType
from utils.config_loader import get_nested_config, get_section, load_config, load_merged_config, merge_config
from utils.serialization import get_field, save_json, to_camel_case, to_serializable, to_snake_case
from visualization import ComprehensiveReportGenerator


@dataclass
class Sample:
    session_id: str
    gesture_type: GestureType
    scores: List[float] = field(default_factory=list)


class TestConfigLoader:
    """Test YAML configuration handling."""

    def test_default_config(self):
        config = load_config()
        assert get_nested_config(config, 'report.integrated_weight') == pytest.approx(0.6)
        assert get_nested_config(config, 'report.evaluation_weight') == pytest.approx(0.4)
        assert get_nested_config(config, 'gesture_analysis.actor_identification') == 'frame'

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / 'missing.yaml')

    def test_empty_file_is_empty_config(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text('', encoding='utf-8')
        assert load_config(path) == {}

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / 'list.yaml'
        path.write_text('- a\n- b\n', encoding='utf-8')
        with pytest.raises(yaml.YAMLError):
            load_config(path)

    def test_nested_lookup(self):
        config = {'a': {'b': {'c': 3}}}
        assert get_nested_config(config, 'a.b.c') == 3
        assert get_nested_config(config, 'a.x', default='d') == 'd'
        assert get_nested_config(None, 'a', default=1) == 1
        assert get_section(config, 'a') == {'b': {'c': 3}}
        assert get_section(config, 'missing') == {}

    def test_merge_does_not_mutate(self):
        base = {'report': {'integrated_weight': 0.6, 'evaluation_weight': 0.4}}
        merged = merge_config(base, {'report': {'integrated_weight': 0.5}})
        assert merged['report'] == {'integrated_weight': 0.5, 'evaluation_weight': 0.4}
        assert base['report']['integrated_weight'] == 0.6

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / 'custom.yaml'
        path.write_text('report:\n  integrated_weight: 0.5\n', encoding='utf-8')
        config = load_merged_config(path)

        assert get_nested_config(config, 'report.integrated_weight') == pytest.approx(0.5)
        assert get_nested_config(config, 'report.evaluation_weight') == pytest.approx(0.4)
        assert get_nested_config(config, 'gesture_analysis.actor_identification') == 'frame'

    def test_default_path_is_plain_load(self):
        assert load_merged_config() == load_config()

    def test_malformed_section_ignored(self):
        config = {'report': 'not a mapping'}
        assert get_section(config, 'report') == {}
        generator = ComprehensiveReportGenerator(config)
        assert generator.integrated_weight == pytest.approx(0.6)
        assert generator.evaluation_weight == pytest.approx(0.4)


class TestCaseConversion:
    """Test key name conversion."""

    def test_round_names(self):
        assert to_camel_case('average_attention_span') == 'averageAttentionSpan'
        assert to_snake_case('averageAttentionSpan') == 'average_attention_span'
        assert to_camel_case('score') == 'score'


class TestSerialization:
    """Test JSON-compatible conversion."""

    def test_dataclass_keys_camel_case(self):
        data = to_serializable(Sample('s1', GestureType.HIGH_FIVE, [0.5]))
        assert data == {'sessionId': 's1', 'gestureType': 'high_five', 'scores': [0.5]}

    def test_dict_keys_kept(self):
        assert to_serializable({'parent_count': 1}) == {'parent_count': 1}

    def test_numpy_and_non_finite(self):
        assert to_serializable(np.int64(3)) == 3
        assert to_serializable(np.float32(0.5)) == pytest.approx(0.5)
        assert to_serializable(float('nan')) == 0.0
        assert to_serializable(np.array([1, 2])) == [1, 2]

    def test_save_json(self, tmp_path):
        path = save_json(Sample('s1', GestureType.HUGGING), tmp_path / 'out' / 'sample.json')
        assert json.loads(path.read_text(encoding='utf-8'))['gestureType'] == 'hugging'


class TestGetField:
    """Test name-tolerant field access."""

    def test_mapping_forms(self):
        assert get_field({'sessionId': 'a'}, 'session_id') == 'a'
        assert get_field({'session_id': 'b'}, 'sessionId') == 'b'
        assert get_field({}, 'session_id', 'x') == 'x'

    def test_objects(self):
        sample = Sample('s1', GestureType.HUGGING)
        assert get_field(sample, 'sessionId') == 's1'
        assert get_field(sample, 'missing', 0) == 0
        assert get_field(None, 'anything', 5) == 5
