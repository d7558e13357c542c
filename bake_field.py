# bake_field.py

"""
================================================================================
OFFLINE FIELD BAKER SCRIPT
================================================================================
This script is a command-line tool for rendering a noise field to a PNG image
("baking"). The raster is split into horizontal row bands that are generated
in parallel worker processes, then stitched back together in row order.

Next to the image it writes generation_config.json, the fully resolved
configuration, so the exact field can be regenerated later.

Usage:
    python bake_field.py --config path/to/your/config.json --output baked_fields
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time
import multiprocessing

import numpy as np
from PIL import Image
from tqdm import tqdm

from noise_generator.config import FieldConfig
from noise_generator.errors import ConfigurationError
from noise_generator.generator import NoiseFieldGenerator

# --- Baking Constants (Rule 1) ---
IMAGE_FILENAME = "field.png"
GENERATION_CONFIG_FILENAME = "generation_config.json"
# Rows per work unit. Small enough to keep every worker busy, large enough
# that per-task overhead stays negligible.
ROWS_PER_BAND = 32

# --- Global variables for worker processes ---
worker_generator = None


def init_worker(config_dict: dict):
    """Initializes the generator for each worker process."""
    global worker_generator
    worker_logger = logging.getLogger(f"Worker-{os.getpid()}")
    # Every worker rebuilds the identical grid from the same seed.
    worker_generator = NoiseFieldGenerator(config=config_dict, logger=worker_logger)


def process_band(band: tuple) -> tuple:
    """Generates the colors for one row band. Returns (row_start, color_array)."""
    row_start, row_stop = band
    return row_start, worker_generator.get_color_array(row_start, row_stop)


def split_rows(height: int, rows_per_band: int = ROWS_PER_BAND) -> list:
    """Partitions [0, height) into consecutive (start, stop) row bands."""
    return [(start, min(start + rows_per_band, height)) for start in range(0, height, rows_per_band)]


def load_config(config_path: str) -> FieldConfig:
    """
    Loads a JSON config file. Parameters may sit under the
    'field_generation_parameters' key or at the top level.
    """
    with open(config_path, 'r') as f:
        file_data = json.load(f)
    return FieldConfig.from_file_data(file_data)


def save_field_image(color_array: np.ndarray, file_path: str):
    """Saves an (H, W, 3) uint8 array as an RGB PNG with Pillow."""
    img = Image.fromarray(color_array)
    img.save(file_path, 'PNG', optimize=True)


def generate_field(config: FieldConfig, num_workers: int, logger: logging.Logger) -> np.ndarray:
    """Generates the full color raster, in parallel when num_workers > 1."""
    bands = split_rows(config.output_height)
    color_array = np.empty((config.output_height, config.output_width, 3), dtype=np.uint8)

    if num_workers <= 1:
        generator = NoiseFieldGenerator(config=config, logger=logger)
        for row_start, row_stop in tqdm(bands, desc="Baking Rows"):
            color_array[row_start:row_stop] = generator.get_color_array(row_start, row_stop)
        return color_array

    logger.info(f"Using {num_workers} worker processes for {len(bands)} row bands.")
    with multiprocessing.Pool(processes=num_workers, initializer=init_worker, initargs=(config.to_dict(),)) as pool:
        results_iterator = pool.imap_unordered(process_band, bands)
        for row_start, band_colors in tqdm(results_iterator, total=len(bands), desc="Baking Rows"):
            color_array[row_start:row_start + band_colors.shape[0]] = band_colors

    return color_array


def bake_field(config: FieldConfig, output_dir: str, logger: logging.Logger, num_workers: int = 1) -> str:
    """
    Renders the configured field and writes the PNG and its generation config
    to output_dir. Returns the path of the written image.
    """
    start_time = time.perf_counter()
    os.makedirs(output_dir, exist_ok=True)
    logger.info(f"Output directory set to '{output_dir}'")
    logger.info(f"Starting bake for a {config.output_width}x{config.output_height} field (seed {config.seed})...")

    color_array = generate_field(config, num_workers, logger)

    image_path = os.path.join(output_dir, IMAGE_FILENAME)
    save_field_image(color_array, image_path)

    # Save the "birth certificate" generation_config.json
    gen_config_path = os.path.join(output_dir, GENERATION_CONFIG_FILENAME)
    with open(gen_config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=4)

    end_time = time.perf_counter()
    logger.info(f"Bake complete! Total time: {end_time - start_time:.2f} seconds.")
    logger.info(f"Field image saved to: {image_path}")
    return image_path


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Offline baker for the Perlin noise field generator.")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a JSON configuration file. Defaults are used if omitted.")
    parser.add_argument("--output", type=str, default="baked_fields",
                        help="Directory to write the image and generation config to.")
    parser.add_argument("--workers", type=int, default=max(1, multiprocessing.cpu_count() - 1),
                        help="Number of worker processes.")
    parser.add_argument("--seed", type=int, default=None, help="Override the configured seed.")
    args = parser.parse_args(argv)

    # --- Setup Logging (Rule 2) ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("Baker")

    try:
        if args.config:
            logger.info(f"Loading configuration from: {args.config}")
            config = load_config(args.config)
        else:
            config = FieldConfig()
        if args.seed is not None:
            config = config.replace(seed=args.seed)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return 1
    except ConfigurationError as e:
        logger.critical(f"Invalid configuration: {e}")
        return 1

    bake_field(config, args.output, logger, num_workers=args.workers)
    return 0


# --- Command-Line Interface ---
if __name__ == "__main__":
    sys.exit(main())
