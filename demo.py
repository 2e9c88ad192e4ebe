#!/usr/bin/env python3
"""Watch random valid moves play out on a minefield."""
import os
import time
from typing import Optional

import numpy as np

from src.minefield import FieldConfig, MinefieldEnv
from src.minefield.environment import ACTION_FLAG


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def pick_candidates(env: MinefieldEnv, valid: np.ndarray) -> list:
    """Reveal while safe spots may remain, flag once only mines are covered."""
    covered = [
        (x, y) for (x, y), spot in env.field.spots()
        if spot.is_hidden or spot.is_flagged
    ]
    if len(covered) == env.field.mines:
        return [
            env.encode_action(ACTION_FLAG, x, y) for x, y in covered
            if env.field.spot(x, y).is_hidden
        ]
    return [a for a in valid if env.decode_action(a)[0] != ACTION_FLAG]


def demo(
    delay: float = 0.3,
    games: int = 5,
    size: int = 9,
    mines: int = 10,
    seed: Optional[int] = None,
):
    """Run demo games with visualization."""
    config = FieldConfig(width=size, height=size, mines=mines)
    env = MinefieldEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(seed)

    print(f"Field: {size}x{size} with {mines} mines ({100*mines/(size*size):.1f}% density)")

    wins = 0

    for game in range(games):
        env.reset(seed=None if seed is None else seed + game)

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(env.render())
        time.sleep(delay)

        done = False
        step = 0

        while not done:
            mask = env.get_action_mask()
            valid = np.flatnonzero(mask)
            if len(valid) == 0:
                break
            action = int(rng.choice(pick_candidates(env, valid)))
            kind, x, y = env.decode_action(action)

            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: kind={kind} at ({x}, {y}) -> {info['last_result']}\n")
            print(env.render())

            if done:
                if info["cleared"]:
                    wins += 1
                    print("\n*** CLEARED! ***")
                else:
                    print("\n*** BOOM ***")

            time.sleep(delay)

    print(f"\n=== Final: {wins}/{games} cleared ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--size", type=int, default=9, help="Field size (NxN)")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines (default: ~12%% of cells)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    mines = args.mines if args.mines is not None else int(args.size * args.size * 0.12)

    demo(delay=args.delay, games=args.games, size=args.size, mines=mines, seed=args.seed)
