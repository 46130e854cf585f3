"""
Main entry point for Big Blast.

Reads settings from the environment (and ``.env``) and launches either
the pygame window or headless auto-play.
"""

import asyncio
import logging
import sys

from bigblast.config import Settings, get_settings
from bigblast.core.events import EventBus


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_window(settings: Settings) -> None:
    """Run the desktop version."""
    from bigblast.audio.engine import AudioEngine
    from bigblast.game.context import GameContext
    from bigblast.game.engine import Game
    from bigblast.window import GameWindow

    audio = AudioEngine(settings.game.audio)
    context = GameContext(settings=settings.game, audio=audio, event_bus=EventBus())
    window = GameWindow(
        game=Game(context),
        audio=audio,
        display=settings.display,
        debug=settings.debug,
    )

    await window.run()


def run_headless(settings: Settings) -> None:
    """Auto-play games without a window."""
    from bigblast.game.context import GameContext
    from bigblast.headless import run_headless as autoplay_games

    context = GameContext(settings=settings.game)
    autoplay_games(
        games=settings.headless_games,
        players=settings.game.default_players,
        context=context,
        seed=settings.game.seed,
    )


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("Big Blast starting...")

    try:
        if settings.env == "window":
            logger.info("Running in window mode")
            asyncio.run(run_window(settings))
        else:
            logger.info("Running headless")
            run_headless(settings)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Big Blast stopped")


if __name__ == "__main__":
    main()
