# main.py
"""
Main entry point for the particle field.

This script orchestrates the whole application lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the Pygame window and builds the engine around it.
4. Runs the frame loop until the window is closed.
5. Handles clean shutdown.
"""
import logging
import sys
from utils import setup_logging, load_config
import cProfile
import pstats
import io

def main(config_path: str = 'config.json') -> int:
    """
    Runs the particle field. Returns the process exit status.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return 1

    setup_logging(config)

    logging.info("--- Particle Field Starting ---")

    sim_params = config.get('simulation_parameters', {})
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    from constants import (
        BACKGROUND_COLOR, DEFAULT_WINDOW_SIZE, FPS, LINE_COLOR, TEXT_COLOR, WINDOW_CAPTION
    )
    from errors import ConfigurationError, SurfaceError
    from settings import EngineConfig
    from simulation import SimulationEngine
    from visualization import PygameEventSource, PygameFrameScheduler, PygameSurface

    # --- Component Initialization ---
    try:
        engine_config = EngineConfig.from_dict(sim_params)
        surface = PygameSurface(
            window_size=tuple(vis_params.get('window_size', DEFAULT_WINDOW_SIZE)),
            fullscreen=vis_params.get('fullscreen', False),
            caption=vis_params.get('caption', WINDOW_CAPTION),
            background_color=vis_params.get('background_color', BACKGROUND_COLOR),
            line_color=vis_params.get('line_color', LINE_COLOR),
            text_color=vis_params.get('text_color', TEXT_COLOR),
        )
    except (ConfigurationError, SurfaceError) as e:
        logging.critical(f"Startup failed: {e}")
        return 1

    events = PygameEventSource(viewport=surface.viewport_size)
    scheduler = PygameFrameScheduler(fps_cap=vis_params.get('fps_cap', FPS))
    engine = SimulationEngine(
        surface,
        config=engine_config,
        viewport=surface.viewport_size,
        scheduler=scheduler,
        events=events,
    )

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    engine.start()
    if profiler is not None:
        profiler.enable()
    try:
        frames = scheduler.run(events, surface=surface, max_frames=run_params.get('max_frames', 0))
    finally:
        if profiler is not None:
            profiler.disable()
        engine.stop()
        surface.close()

    logging.info(f"Frame loop finished after {frames} frames.")

    if profiler is not None:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Particle Field Shutting Down ---")
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
