# main.py

import pygame
import constants
import json
import logging
import logger_setup
import numpy as np
from emissions import GasType
from particle_system import ParticleSystem

# Get the application's dedicated logger
logger = logging.getLogger("ghg_sim")

# One control per gas: (label, gas, keyboard shortcut)
CONTROLS = [
    ("Flight (CO2)", GasType.CO2, pygame.K_1),
    ("Cow (CH4)", GasType.CH4, pygame.K_2),
    ("Window AC (R410a)", GasType.R410A, pygame.K_3),
]


def build_buttons():
    """Lays out one button per gas along the bottom-left of the window."""
    buttons = []
    top = constants.HEIGHT - constants.BUTTON_HEIGHT - constants.BUTTON_MARGIN
    for i, (label, gas, _) in enumerate(CONTROLS):
        left = constants.BUTTON_MARGIN + i * (constants.BUTTON_WIDTH + constants.BUTTON_MARGIN)
        rect = pygame.Rect(left, top, constants.BUTTON_WIDTH, constants.BUTTON_HEIGHT)
        buttons.append((rect, label, gas))
    return buttons


def gas_for_event(event, buttons):
    """Maps a key press or button click to the gas it emits, or None."""
    if event.type == pygame.KEYDOWN:
        for _, gas, key in CONTROLS:
            if event.key == key:
                return gas
    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        for rect, _, gas in buttons:
            if rect.collidepoint(event.pos):
                return gas
    return None


def draw_hud(screen, font, buttons, frame):
    for rect, label, _ in buttons:
        pygame.draw.rect(screen, constants.PANEL, rect, border_radius=6)
        text = font.render(label, True, constants.WHITE)
        screen.blit(text, text.get_rect(center=rect.center))

    counts = frame.live_counts
    lines = [
        f"CO2: {counts['co2']}",
        f"CH4: {counts['ch4']}",
        f"R410a: {counts['r410a']}",
        f"Warming: {frame.warming_ratio:.0%}",
    ]
    for i, line in enumerate(lines):
        text = font.render(line, True, constants.WHITE)
        screen.blit(text, (constants.BUTTON_MARGIN, constants.BUTTON_MARGIN + i * (constants.FONT_SIZE + 4)))


def paint_frame(particle_system, frame, screen, trail_surface):
    """
    Paints one frame: a translucent background overlay that leaves fading
    trails, a blurred glow pass, then the particles themselves.
    """
    r, g, b, alpha = frame.background_color
    trail_surface.fill((int(r), int(g), int(b), int(alpha * 255)))
    screen.blit(trail_surface, (0, 0))

    glow_surface = pygame.Surface((constants.WIDTH, constants.HEIGHT), pygame.SRCALPHA)
    particle_system.draw(glow_surface, frame, is_glow_pass=True)

    scale = constants.BLOOM_RADIUS
    scaled_size = (constants.WIDTH // scale, constants.HEIGHT // scale)
    scaled_surface = pygame.transform.smoothscale(glow_surface, scaled_size)
    blurred_surface = pygame.transform.smoothscale(scaled_surface, (constants.WIDTH, constants.HEIGHT))

    intensity = constants.BLOOM_INTENSITY
    blurred_surface.fill((intensity, intensity, intensity), special_flags=pygame.BLEND_RGB_MULT)
    screen.blit(blurred_surface, (0, 0), special_flags=pygame.BLEND_RGB_ADD)

    particle_system.draw(screen, frame, is_glow_pass=False)


def run_simulation_loop(particle_system, screen, clock, trail_surface, sim_config):
    """The main animation loop. Runs until the window closes or max_ticks is reached."""
    running = True
    log_interval = sim_config.get('stats_log_interval', 300)
    max_ticks = sim_config.get('max_ticks')

    font = pygame.font.SysFont(None, constants.FONT_SIZE)
    buttons = build_buttons()

    while running and (max_ticks is None or particle_system.tick < max_ticks):
        # Event handling
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            else:
                gas = gas_for_event(event, buttons)
                if gas is not None:
                    particle_system.spawn(gas)

        frame = particle_system.advance_frame()

        # --- Logging (throttled) ---
        if frame.tick % log_interval == 0:
            logger.debug(
                f"Tick={frame.tick}, "
                f"Particles={particle_system.num_particles}, "
                f"CO2={frame.live_counts['co2']}, "
                f"CH4={frame.live_counts['ch4']}, "
                f"R410a={frame.live_counts['r410a']}, "
                f"TotalWarming={particle_system.total_warming_potential:.3f}, "
                f"Ratio={frame.warming_ratio:.3f}"
            )

        paint_frame(particle_system, frame, screen, trail_surface)
        draw_hud(screen, font, buttons, frame)
        pygame.display.flip()
        clock.tick(constants.FPS)

    return particle_system.tick


def main():
    """
    Main function to initialize and run the greenhouse atmosphere animation.
    """
    # --- Setup ---
    logger_setup.setup_logging()

    with open('config.json', 'r') as f:
        config = json.load(f)
    sim_config = config['simulation']

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config['master_seed'])
    logger.info(f"Master RNG initialized with seed: {config['master_seed']}")

    # --- Initialization ---
    pygame.init()
    screen = pygame.display.set_mode((constants.WIDTH, constants.HEIGHT))
    pygame.display.set_caption(constants.TITLE)
    clock = pygame.time.Clock()

    particle_system = ParticleSystem(
        config=sim_config,
        rng=rng,
        bounds=(constants.WIDTH, constants.HEIGHT)
    )

    trail_surface = pygame.Surface((constants.WIDTH, constants.HEIGHT), pygame.SRCALPHA)

    ticks = run_simulation_loop(particle_system, screen, clock, trail_surface, sim_config)

    logger.info(
        f"Application shutting down after {ticks} ticks with "
        f"{particle_system.num_particles} live particles."
    )
    pygame.quit()

if __name__ == "__main__":
    main()
