"""
Cross Pose Coach - Real-time Posture Feedback
=============================================

Arms held out in a "cross", left leg lifted to a target angle. Every frame the
skeleton overlay is colored per body region:

    red = incorrect, green = correct, yellow = below, cyan = above

4-Step Pipeline:
1. Frame Capture - Get frames from webcam/video
2. Skeleton Tracking - MediaPipe Pose -> sensor-space skeleton
3. Region Classification - Arms and leg region codes
4. Frame Classification - Combined result per skeleton

Usage:
    python main.py                              # Webcam
    python main.py --video path.mp4             # Video file
    python main.py --target-angle 20            # Different leg target
    python main.py --record session.jsonl       # Save tracked skeletons
    python main.py --replay session.jsonl       # Classify a recording offline

Controls:
    Q / ESC - Quit
    S       - Save screenshot
"""

import argparse
import logging
import os
import time
from collections import Counter
from typing import Any, Dict, List, Optional

import cv2
import numpy as np
from tqdm import tqdm

import config
from pipeline.recording import SkeletonRecorder, read_recording
from pipeline.settings import load_classification_config
from pipeline.skeleton import SkeletonFrame, SkeletonTrackingState
from pipeline.step1_frame_capture import FrameCapture, VideoCapture, WebcamCapture
from pipeline.step2_skeleton_tracking import SkeletonTracker
from pipeline.step3_region_classifiers import ClassificationConfig
from pipeline.step4_frame_classifier import FrameClassifier, SkeletonClassification
from utils.projection import SkeletonProjector
from utils.visualization import (
    draw_clipped_edges,
    draw_position_only,
    draw_skeleton,
    draw_status_overlay,
)


class CrossPosePipeline:
    """Complete capture -> tracking -> classification -> overlay pipeline."""

    def __init__(
        self,
        classification_config: Optional[ClassificationConfig] = None,
        record_path: Optional[str] = None
    ):
        """
        Initialize the pipeline.

        Args:
            classification_config: Target angle, tolerance, gating (default from config)
            record_path: If set, tracked skeletons from the camera or video are
                written to this JSON-lines file (opened on the first frame)
        """
        self.frame_classifier = FrameClassifier(classification_config)
        self.tracker: Optional[SkeletonTracker] = None
        self.record_path = record_path
        self.recorder: Optional[SkeletonRecorder] = None
        self.projector = SkeletonProjector()

    @property
    def config(self) -> ClassificationConfig:
        return self.frame_classifier.config

    def _ensure_tracker(self) -> SkeletonTracker:
        if self.tracker is None:
            print("Loading MediaPipe Pose...")
            self.tracker = SkeletonTracker()
        return self.tracker

    def process_frame(
        self,
        frame: np.ndarray,
        frame_number: int = 0,
        timestamp: Optional[float] = None
    ) -> Dict[str, Any]:
        """
        Process a single camera frame through the full pipeline.

        Returns:
            dict with: skeleton, classification, annotated_frame
        """
        result = {
            'skeleton': None,
            'classification': None,
            'annotated_frame': frame.copy()
        }

        tracked = self._ensure_tracker().track(frame)

        if self.record_path:
            if self.recorder is None:
                self.recorder = SkeletonRecorder(self.record_path)
            skeletons = [tracked.skeleton] if tracked else []
            self.recorder.write(SkeletonFrame(frame_number, skeletons, timestamp))

        if tracked is None:
            return result

        classification = self.frame_classifier.classify_skeleton(tracked.skeleton)
        annotated = draw_clipped_edges(result['annotated_frame'], tracked.skeleton.clipped_edges)
        annotated = draw_skeleton(annotated, tracked.skeleton, tracked.screen_points, classification)

        result['skeleton'] = tracked.skeleton
        result['classification'] = classification
        result['annotated_frame'] = annotated
        return result

    def render_skeleton_frame(
        self,
        frame: SkeletonFrame,
        results: List[SkeletonClassification]
    ) -> np.ndarray:
        """Draw every skeleton of a recorded frame on a black canvas."""
        canvas = np.zeros((self.projector.height, self.projector.width, 3), dtype=np.uint8)

        for item in results:
            points = self.projector.project(item.skeleton)
            canvas = draw_clipped_edges(canvas, item.skeleton.clipped_edges)
            canvas = draw_skeleton(canvas, item.skeleton, points, item.result)

        for skeleton in frame.skeletons:
            if skeleton.tracking_state is not SkeletonTrackingState.POSITION_ONLY:
                continue
            center = self.projector.to_screen(skeleton.position)
            if center is not None:
                canvas = draw_position_only(canvas, center)

        return canvas

    def run_webcam(self, camera_id: int = None):
        """Run pipeline on webcam feed."""
        camera_id = camera_id if camera_id is not None else config.CAMERA_ID

        print(f"Starting webcam (ID: {camera_id})...")
        print("Press Q to quit, S to save screenshot\n")

        capture = WebcamCapture(
            camera_id=camera_id,
            width=config.CAMERA_WIDTH,
            height=config.CAMERA_HEIGHT
        )
        self._run_capture_loop(capture)

    def run_video(self, video_path: str):
        """Run pipeline on video file."""
        print(f"Processing video: {video_path}")
        print("Press Q to quit, S to save screenshot\n")

        capture = VideoCapture(video_path)
        self._run_capture_loop(capture, total_frames=capture.total_frames)

    def run_replay(self, recording_path: str, show: bool = False) -> Dict[str, Counter]:
        """
        Classify a skeleton recording.

        Args:
            recording_path: JSON-lines recording
            show: Display the colored skeletons while replaying

        Returns:
            Counter of region codes per region
        """
        summary = {'arms': Counter(), 'leg': Counter()}
        print(f"Replaying recording: {recording_path}")

        for frame in tqdm(read_recording(recording_path), desc="Classifying", unit="frame"):
            results = self.frame_classifier.classify_frame(frame)
            for item in results:
                summary['arms'][item.result.arms_code.name] += 1
                summary['leg'][item.result.leg_code.name] += 1

            if show:
                canvas = self.render_skeleton_frame(frame, results)
                canvas = draw_status_overlay(
                    canvas, results[0].result if results else None,
                    0.0, self.config.target_leg_angle_degrees
                )
                cv2.imshow(config.WINDOW_NAME, canvas)
                key = cv2.waitKey(30) & 0xFF
                if key in (ord('q'), 27):
                    break

        if show:
            cv2.destroyAllWindows()

        for region, counts in summary.items():
            total = sum(counts.values())
            print(f"{region.capitalize()}: {total} frames")
            for code, count in counts.most_common():
                print(f"  {code:<10} {count:>6} ({count / total:.1%})")

        return summary

    def _run_capture_loop(self, capture: FrameCapture, total_frames: Optional[int] = None):
        """Main capture and processing loop."""
        fps_start = time.time()
        frame_count = 0
        fps = 0.0
        screenshot_cnt = 0

        frames = capture.frames()
        if total_frames:
            frames = tqdm(frames, total=total_frames, desc="Processing", unit="frame")

        with capture:
            for frame_number, frame in frames:
                result = self.process_frame(frame, frame_number, capture.timestamp())

                annotated = draw_status_overlay(
                    result['annotated_frame'],
                    result['classification'],
                    fps,
                    self.config.target_leg_angle_degrees
                )
                cv2.imshow(config.WINDOW_NAME, annotated)

                # Calculate FPS
                frame_count += 1
                if frame_count % 30 == 0:
                    fps = 30 / (time.time() - fps_start)
                    fps_start = time.time()

                key = cv2.waitKey(1) & 0xFF
                if key in (ord('q'), 27):   # Q or ESC
                    break
                elif key == ord('s'):
                    os.makedirs(config.SCREENSHOT_DIR, exist_ok=True)
                    path = os.path.join(config.SCREENSHOT_DIR, f"cross_{screenshot_cnt:04d}.jpg")
                    cv2.imwrite(path, annotated)
                    print(f"Screenshot saved: {path}")
                    screenshot_cnt += 1

        cv2.destroyAllWindows()

    def close(self):
        """Release resources."""
        if self.tracker is not None:
            self.tracker.close()
        if self.recorder is not None:
            self.recorder.close()
            print(f"Recorded {self.recorder.frames_written} frames to {self.recorder.path}")


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Cross Pose Coach - Real-time Posture Feedback',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Input source
    input_group = parser.add_mutually_exclusive_group()
    input_group.add_argument('--video', type=str, help='Path to video file')
    input_group.add_argument('--replay', type=str, help='Path to skeleton recording (.jsonl)')

    # Camera settings
    parser.add_argument('--camera', type=int, default=config.CAMERA_ID,
                        help='Camera ID for webcam mode')

    # Classification settings
    parser.add_argument('--config', type=str, default=None,
                        help='YAML file with classification settings')
    parser.add_argument('--target-angle', type=float, default=None,
                        help=f'Leg target angle in degrees (default {config.TARGET_LEG_ANGLE})')
    parser.add_argument('--no-gate', action='store_true',
                        help='Classify regions even when their joints are not tracked')

    # Output
    parser.add_argument('--record', type=str, default=None,
                        help='Write tracked skeletons to this JSON-lines file')
    parser.add_argument('--show', action='store_true',
                        help='Display skeletons while replaying a recording')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging')

    args = parser.parse_args(argv)
    if args.replay and args.record:
        parser.error('--record only applies to webcam or video input, not --replay')
    return args


def main():
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    classification_config = load_classification_config(
        args.config,
        target_leg_angle_degrees=args.target_angle,
        gate_untracked_joints=False if args.no_gate else None,
    )
    print(f"Leg target angle: {classification_config.target_leg_angle_degrees:.1f} deg, "
          f"tolerance: ±{classification_config.tolerance_factor:.0%}")

    pipeline = CrossPosePipeline(classification_config, record_path=args.record)

    try:
        if args.replay:
            pipeline.run_replay(args.replay, show=args.show)
        elif args.video:
            pipeline.run_video(args.video)
        else:
            pipeline.run_webcam(args.camera)
    finally:
        pipeline.close()


if __name__ == '__main__':
    main()
