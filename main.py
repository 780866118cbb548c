#!/usr/bin/env python3
"""
Main orchestration script for Play Scope.

This script coordinates the parent-child play analysis pipeline:
1. Annotation loading (video-intelligence JSON export)
2. Gesture analysis (actor separation, gesture classification, patterns, sync)
3. Detailed play analysis (emotion, proximity, activity, toys, optimal windows)
4. Language interaction analysis (utterances, turns, keywords)
5. Integrated analysis (fused signals, profiles, findings)
6. Play evaluation (sub-scores, weighted overall, grade, insights)
7. Comprehensive report

Usage:
    python main.py --annotations results.json --output out/ --config configs/thresholds.yaml

Engineering approach:
- Modular pipeline (each stage can be run independently)
- Graceful degradation (missing modalities fall back to neutral defaults)
- Configurable thresholds (YAML)
- Comprehensive logging
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from fusion import build_integrated_analysis
from gesture_analysis import analyze_basic_gestures
from play_analysis import analyze_language_interaction, perform_detailed_play_analysis
from scoring import PlayEvaluationSystem
from utils.config_loader import load_merged_config
from utils.serialization import save_json
from video_annotations import VideoIntelligenceResults, load_annotations
from visualization import ComprehensiveReportGenerator, save_report_json

logger = logging.getLogger(__name__)

STAGE_FILES = {
    'gesture_analysis': 'gesture_analysis.json',
    'detailed_analysis': 'detailed_play_analysis.json',
    'language_analysis': 'language_interaction.json',
    'integrated_analysis': 'integrated_analysis.json',
    'evaluation': 'play_evaluation.json',
}


def setup_logging(level: str = 'INFO', log_file: str = 'play_scope.log'):
    """Log to a file and stdout."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout)
        ]
    )


def run_pipeline(
    results: Any,
    config: Dict = None,
    session_id: str = None,
    report_type: str = None
) -> Dict[str, Any]:
    """
    Execute the complete play analysis pipeline in memory.

    Args:
        results: VideoIntelligenceResults or its JSON dict form
        config: Configuration dictionary
        session_id: Session identifier (generated when omitted)
        report_type: parent | professional | detailed (config default when omitted)

    Returns:
        Dict with gesture_analysis, detailed_analysis, language_analysis,
        integrated_analysis, evaluation and report
    """
    config = config if config is not None else {}
    results = VideoIntelligenceResults.from_dict(results)
    session_id = session_id or f"session_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

    logger.info("=" * 80)
    logger.info(f"PLAY SCOPE - Parent-Child Play Analysis ({session_id})")
    logger.info("=" * 80)

    logger.info("STAGE 1: Gesture analysis")
    gesture_analysis = analyze_basic_gestures(results, config)

    logger.info("STAGE 2: Detailed play analysis")
    detailed_analysis = perform_detailed_play_analysis(results, config)

    logger.info("STAGE 3: Language interaction analysis")
    language_analysis = analyze_language_interaction(results, config)

    logger.info("STAGE 4: Integrated analysis")
    integrated_analysis = build_integrated_analysis(
        detailed_analysis,
        gesture_analysis,
        language_analysis,
        session_id,
        config,
        explicit_content=results.explicit_content
    )

    logger.info("STAGE 5: Play evaluation")
    evaluation = PlayEvaluationSystem(config).evaluate_play_session(integrated_analysis)

    logger.info("STAGE 6: Comprehensive report")
    options = {'report_type': report_type} if report_type else None
    report = ComprehensiveReportGenerator(config).generate_report(
        session_id,
        {
            'video': {
                'gesture_analysis': gesture_analysis,
                'detailed_analysis': detailed_analysis,
            },
            'voice': language_analysis,
            'integrated': integrated_analysis,
            'evaluation': evaluation,
        },
        options
    )

    logger.info(
        f"Pipeline complete: evaluation {evaluation.scores.overall} ({evaluation.grade}), "
        f"report {report.executive_summary.overall_score} ({report.executive_summary.grade})"
    )

    return {
        'gesture_analysis': gesture_analysis,
        'detailed_analysis': detailed_analysis,
        'language_analysis': language_analysis,
        'integrated_analysis': integrated_analysis,
        'evaluation': evaluation,
        'report': report,
    }


def write_outputs(outputs: Dict[str, Any], output_dir) -> Dict[str, Path]:
    """Write one JSON file per stage plus the report."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = {
        stage: save_json(outputs[stage], output_dir / filename)
        for stage, filename in STAGE_FILES.items()
    }
    paths['report'] = save_report_json(outputs['report'], output_dir / 'comprehensive_report.json')
    return paths


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Play Scope - Parent-Child Play Interaction Analysis',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Basic usage
  python main.py --annotations results.json --output out/

  # Professional report with custom config
  python main.py --annotations results.json --config custom.yaml --report-type professional
        """
    )

    parser.add_argument(
        '--annotations',
        type=str,
        required=True,
        help='Path to video-intelligence annotation JSON'
    )

    parser.add_argument(
        '--config',
        type=str,
        default='configs/thresholds.yaml',
        help='Configuration YAML layered over configs/thresholds.yaml (default: configs/thresholds.yaml)'
    )

    parser.add_argument(
        '--output',
        type=str,
        default='data/outputs',
        help='Output directory for results (default: data/outputs)'
    )

    parser.add_argument(
        '--session-id',
        type=str,
        default=None,
        help='Session identifier (default: timestamp-based)'
    )

    parser.add_argument(
        '--report-type',
        type=str,
        choices=['parent', 'professional', 'detailed'],
        default=None,
        help='Report audience (default: from config)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default='INFO',
        help='Logging level (default: INFO)'
    )

    args = parser.parse_args()
    setup_logging(args.log_level)

    annotations_path = Path(args.annotations)
    if not annotations_path.exists():
        logger.error(f"Annotation file not found: {annotations_path}")
        sys.exit(1)

    config_path = Path(args.config)
    if not config_path.exists():
        logger.error(f"Config file not found: {config_path}")
        sys.exit(1)

    try:
        config = load_merged_config(config_path)
        results = load_annotations(annotations_path)

        outputs = run_pipeline(results, config, args.session_id, args.report_type)
        paths = write_outputs(outputs, args.output)

        logger.info("=" * 80)
        logger.info("SUCCESS: Analysis completed successfully")
        logger.info(f"  Report: {paths['report']}")
        logger.info("=" * 80)

        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Analysis interrupted by user")
        sys.exit(1)

    except Exception as e:
        logger.error(f"ERROR: Pipeline failed: {type(e).__name__}: {e}")
        logger.exception("Full traceback:")
        sys.exit(1)


if __name__ == '__main__':
    main()
