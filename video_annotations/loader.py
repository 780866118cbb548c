"""Loading annotation bundles from JSON files."""

import json
import logging
from pathlib import Path

from .models import VideoIntelligenceResults

logger = logging.getLogger(__name__)


def load_annotations(path) -> VideoIntelligenceResults:
    """
    Load a video-intelligence annotation bundle from a JSON file.

    The file may hold the bundle itself or wrap it under an
    'annotationResults' / 'results' key.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Annotation file not found: {path}")

    logger.info(f"Loading annotations from {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        for wrapper in ('annotationResults', 'results'):
            inner = data.get(wrapper)
            if isinstance(inner, list) and inner and isinstance(inner[0], dict):
                data = inner[0]
                break
            if isinstance(inner, dict):
                data = inner
                break

    results = VideoIntelligenceResults.from_dict(data)

    logger.info(
        f"Loaded {len(results.object_tracking)} object tracks, "
        f"{len(results.person_detection)} person annotations, "
        f"{len(results.face_detection)} face annotations, "
        f"{len(results.speech_transcription)} speech segments"
    )

    return results
