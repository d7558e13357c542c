# viewer.py

"""
================================================================================
NOISE FIELD VIEWER
================================================================================
Opens a window, draws one generated noise field into it and keeps it on
screen until the window is closed or ESC is pressed.

Usage:
    python viewer.py [--config path/to/config.json]
================================================================================
"""
import sys
import json
import logging
import argparse

import numpy as np
import pygame

from noise_generator.config import FieldConfig
from noise_generator.errors import ConfigurationError
from noise_generator.generator import NoiseFieldGenerator

# --- Application Constants (Rule 1) ---
FRAMES_PER_SECOND = 30
BACKGROUND_COLOR = (10, 10, 20)


def color_array_to_surface(color_array: np.ndarray) -> pygame.Surface:
    """
    Converts an (H, W, 3) uint8 raster into a Pygame surface.
    surfarray expects (W, H, 3), so the array is transposed first.
    """
    return pygame.surfarray.make_surface(np.transpose(color_array, (1, 0, 2)))


class ViewerApp:
    """The main application class for the noise field viewer."""
    def __init__(self, config: FieldConfig):
        self.logger = logging.getLogger(__name__)
        self.config = config

        self.logger.info("Initializing Pygame...")
        pygame.init()

        self.screen = pygame.display.set_mode((config.output_width, config.output_height))
        pygame.display.set_caption(
            f"Perlin Noise Field | seed {config.seed} | {config.octaves} octave(s)"
        )
        self.clock = pygame.time.Clock()
        self.is_running = True

        generator = NoiseFieldGenerator(config=config, logger=self.logger)
        self.logger.info("Generating field...")
        self.field_surface = color_array_to_surface(generator.get_color_array())
        self.logger.info("Field ready. Press ESC to exit.")

    def run(self):
        """The main application loop."""
        while self.is_running:
            self.handle_events()
            self.draw()
            self.clock.tick(FRAMES_PER_SECOND)

        self.logger.info("Exiting viewer.")
        pygame.quit()

    def handle_events(self):
        """Processes user input and other events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.is_running = False

    def draw(self):
        self.screen.fill(BACKGROUND_COLOR)
        self.screen.blit(self.field_surface, (0, 0))
        pygame.display.flip()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Display a generated Perlin noise field.")
    parser.add_argument("--config", type=str, default=None, help="Path to a JSON configuration file.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    logger = logging.getLogger("Viewer")

    try:
        if args.config:
            with open(args.config, 'r') as f:
                config = FieldConfig.from_file_data(json.load(f))
        else:
            config = FieldConfig()
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return 1
    except ConfigurationError as e:
        logger.critical(f"Invalid configuration: {e}")
        return 1

    ViewerApp(config).run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
