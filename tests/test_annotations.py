"""
Unit tests for annotation parsing and loading.
"""

import json
import sys
from pathlib import Path

import pytest  # pyright: ignore[reportMissingImports]

sys.path.insert(0, str(Path(__file__).parent.parent))

from video_annotations import (
    DetectionAttribute,
    NormalizedBoundingBox,
    VideoIntelligenceResults,
    load_annotations,
    parse_time_offset,
)


SAMPLE = {
    'objectTracking': [
        {
            'entity': {'description': 'Person', 'entityId': '/m/01g317'},
            'confidence': 0.9,
            'frames': [
                {'normalizedBoundingBox': {'left': 0.1, 'top': 0.1, 'right': 0.4, 'bottom': 0.9},
                 'timeOffset': '0.5s'},
                {'normalizedBoundingBox': {'left': 0.12, 'top': 0.1, 'right': 0.42, 'bottom': 0.9},
                 'timeOffset': {'seconds': 1, 'nanos': 500000000}},
            ],
        },
        {
            'entity': {'description': 'Toy'},
            'frames': [{'normalizedBoundingBox': {'left': 0.5, 'top': 0.5, 'right': 0.6, 'bottom': 0.6}}],
        },
    ],
    'personDetection': [{
        'tracks': [{
            'segment': {'startTimeOffset': '0s', 'endTimeOffset': '2s'},
            'timestampedObjects': [{
                'normalizedBoundingBox': {'left': 0.3, 'top': 0.1, 'right': 0.5, 'bottom': 0.5},
                'timeOffset': '1s',
                'attributes': [{'name': 'smiling', 'value': 'TRUE', 'confidence': 0.8}],
            }],
        }],
    }],
    'speechTranscription': [{
        'alternatives': [{
            'transcript': 'hello there',
            'confidence': 0.9,
            'words': [
                {'word': 'hello', 'startTime': '0s', 'endTime': '0.4s', 'speakerTag': 1},
                {'word': 'there', 'startTime': '0.5s', 'endTime': '0.9s', 'speakerTag': '1'},
            ],
        }],
        'languageCode': 'en-US',
    }],
}


class TestTimeOffsets:
    """Test time offset parsing."""

    def test_string_with_suffix(self):
        assert parse_time_offset('1.5s') == pytest.approx(1.5)

    def test_seconds_and_nanos(self):
        assert parse_time_offset({'seconds': 2, 'nanos': 250000000}) == pytest.approx(2.25)

    def test_unparseable_is_zero(self):
        assert parse_time_offset('soon') == 0.0
        assert parse_time_offset(None) == 0.0
        assert parse_time_offset(-3) == 0.0


class TestBoundingBox:
    """Test normalization of boxes."""

    def test_coordinates_clamped_and_ordered(self):
        box = NormalizedBoundingBox(left=0.8, top=1.4, right=0.2, bottom=-0.1)
        assert box.left == pytest.approx(0.2)
        assert box.right == pytest.approx(0.8)
        assert box.top == 0.0
        assert box.bottom == 1.0

    def test_missing_box_is_zero_box(self):
        assert NormalizedBoundingBox.from_dict(None).is_empty
        assert NormalizedBoundingBox.from_dict({'vertices': [{'x': 0.1}]}).is_empty


class TestResultsParsing:
    """Test parsing of the annotation bundle."""

    def test_object_tracks(self):
        results = VideoIntelligenceResults.from_dict(SAMPLE)
        assert len(results.object_tracking) == 2
        assert len(results.person_tracks()) == 1
        assert results.person_tracks()[0].frames[1].time_offset == pytest.approx(1.5)
        assert [t.label for t in results.non_person_tracks()] == ['toy']
        assert results.matching_tracks(['toy'])[0].description == 'Toy'

    def test_detection_attributes(self):
        results = VideoIntelligenceResults.from_dict(SAMPLE)
        obj = results.person_detection[0].tracks[0].timestamped_objects[0]
        assert obj.has_attribute('smiling')
        assert not obj.has_attribute('looking_at_camera')

    def test_attribute_truthiness(self):
        assert DetectionAttribute('smiling', 'yes').is_true
        assert DetectionAttribute('smiling', '1').is_true
        assert not DetectionAttribute('smiling', 'false').is_true
        assert not DetectionAttribute('smiling', '').is_true

    def test_speech_words(self):
        results = VideoIntelligenceResults.from_dict(SAMPLE)
        words = results.speech_transcription[0].best.words
        assert [w.speaker_tag for w in words] == [1, 1]
        assert words[1].start_time == pytest.approx(0.5)

    def test_empty_input(self):
        results = VideoIntelligenceResults.from_dict({})
        assert results.is_empty
        assert VideoIntelligenceResults.from_dict(None).is_empty

    def test_instance_passes_through(self):
        results = VideoIntelligenceResults.from_dict(SAMPLE)
        assert VideoIntelligenceResults.from_dict(results) is results


class TestLoader:
    """Test loading annotations from disk."""

    def test_load_wrapped_file(self, tmp_path):
        path = tmp_path / 'annotations.json'
        path.write_text(json.dumps({'annotationResults': [SAMPLE]}), encoding='utf-8')
        results = load_annotations(path)
        assert len(results.object_tracking) == 2

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_annotations(tmp_path / 'missing.json')
