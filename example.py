#!/usr/bin/env python3
"""
Command line examples for the binaural beat library.

Generates a binaural clip, writes it as WAV into an output directory and
prints a short analysis. Values that are missing, non-numeric or not positive
fall back to the application defaults, the same way the input form does.

Examples:
  # Default clip: caduceus 196 (49.97 Hz), 1 Hz beat, 180 degree shift
  python example.py

  # 200 Hz carrier, 6 Hz beat, 10 seconds
  python example.py --frequency 200 --beat 6 --duration 10

  # Caduceus preset 199 with one mono file per ear
  python example.py --caduceus 199 --beat 4 --split

  # Exactly 10 shared periods
  python example.py --frequency 440 --beat 4 --loops 10
"""

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from binaural import (BIT_DEPTH, CADUCEUS_FREQUENCIES, CUSTOM_CLIP_BASENAME, SAMPLE_RATE,
                      BinauralError, ClipService, GenerationRequest, analyze_clip)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a binaural beat WAV clip.")
    parser.add_argument("--frequency", help="base frequency in Hz (right ear)")
    parser.add_argument("--caduceus", type=int, choices=sorted(CADUCEUS_FREQUENCIES),
                        help="use a caduceus preset as the base frequency")
    parser.add_argument("--beat", help="beat frequency in Hz added for the left ear")
    parser.add_argument("--shift", help="left ear phase shift in degrees")
    parser.add_argument("--duration", help="clip length in seconds")
    parser.add_argument("--loops", type=int, help="number of shared periods instead of a duration")
    parser.add_argument("--sample-rate", type=int, default=SAMPLE_RATE)
    parser.add_argument("--bit-depth", type=int, default=BIT_DEPTH, choices=(8, 16, 32))
    parser.add_argument("--output-dir", default="generated")
    parser.add_argument("--basename", default=CUSTOM_CLIP_BASENAME)
    parser.add_argument("--split", action="store_true", help="write one mono file per ear")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def request_from_args(args) -> GenerationRequest:
    frequency = args.frequency
    if args.caduceus is not None:
        frequency = str(CADUCEUS_FREQUENCIES[args.caduceus])

    request = GenerationRequest.from_text(frequency, args.beat, args.shift, args.duration)
    if args.loops is not None:
        request = GenerationRequest(request.frequency, request.beat, request.phase_shift_deg,
                                    num_loops=args.loops)
    return request


def compose(service: ClipService, request: GenerationRequest, basenames):
    """Generate and write a clip; runs on the single background worker."""
    clip = service.generate(request)
    return clip, service.write(clip, basenames)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    request = request_from_args(args)
    print(f"Frequency: {request.frequency:.5f} Beat: {request.beat:.5f} "
          f"Shift: {request.phase_shift_deg:.5f}")

    basenames = [f"{args.basename}_right", f"{args.basename}_left"] if args.split else [args.basename]

    try:
        service = ClipService(args.sample_rate, args.bit_depth, output_dir)
        with ThreadPoolExecutor(max_workers=1) as worker:
            clip, paths = worker.submit(compose, service, request, basenames).result()
    except BinauralError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Generated {clip.duration_samples} samples per channel "
          f"({clip.duration_seconds:.3f}s at {clip.sample_rate} Hz, {clip.bit_depth}-bit)")
    for path in paths:
        print(f"   ✓ Wrote {path}")

    analysis = analyze_clip(clip)
    for name, channel in zip(["Right", "Left"], analysis["channels"]):
        print(f"   {name}: {channel['dominant_frequency']:.2f} Hz, "
              f"peak {channel['peak']:.3f}, rms {channel['rms']:.3f}")
    if analysis["beat"] is not None:
        print(f"   Measured beat: {analysis['beat']:.2f} Hz")
    return 0


if __name__ == "__main__":
    sys.exit(main())
