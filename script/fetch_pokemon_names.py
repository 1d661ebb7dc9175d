"""
Rebuild the bundled Pokémon names list from PokéAPI.

What it does:
- Downloads the species list (`/pokemon-species?limit=N`), which is returned in
  national-dex order.
- Canonicalizes each name to letters only ("mr-mime" -> "mrmime").
- Writes one name per line and prints a validation summary. Names are never
  dropped: line position is the dex number used for sprite URLs.

Usage:
    python -m script.fetch_pokemon_names --out pokedle/datasets/data/pokemon_names.txt
    # first generation only:
    python -m script.fetch_pokemon_names --limit 151
"""

import argparse

import requests

from pokedle.datasets import canonical_name, pretty_summary, validate_namelist, write_lines

URL = "https://pokeapi.co/api/v2/pokemon-species"


def fetch_names(url: str = URL, limit: int = 1025, timeout: int = 30) -> list[str]:
    r = requests.get(url, params={"limit": limit, "offset": 0}, timeout=timeout,
                     headers={"Accept": "application/json"})
    r.raise_for_status()
    results = r.json().get("results", [])
    return [canonical_name(item["name"]) for item in results]


def main():
    ap = argparse.ArgumentParser(description="Fetch canonical Pokémon names from PokéAPI")
    ap.add_argument("--url", default=URL)
    ap.add_argument("--limit", type=int, default=1025, help="number of species to fetch")
    ap.add_argument("--min-len", type=int, default=3)
    ap.add_argument("--max-len", type=int, default=12)
    ap.add_argument("--out", default="pokedle/datasets/data/pokemon_names.txt")
    args = ap.parse_args()

    names = fetch_names(args.url, args.limit)

    write_lines(names, args.out)
    print(f"Wrote {len(names)} names -> {args.out}")
    print(pretty_summary(validate_namelist(args.out, args.min_len, args.max_len)))


if __name__ == "__main__":
    main()
