import json
import os
from glob import glob
from typing import Dict, Set


def find_missing_keys(base_path: str = None) -> Dict[str, Set[str]]:
    """Returns, per locale code, the keys other catalogues define but this one lacks."""
    base_path = base_path or os.path.dirname(os.path.abspath(__file__))
    locale_files = glob(os.path.join(base_path, '*.json'))

    all_keys = set()
    locale_key_map = {}

    for file_path in locale_files:
        locale_code = os.path.splitext(os.path.basename(file_path))[0]
        with open(file_path, 'r', encoding='utf-8') as f:
            keys = set(json.load(f).keys())
        locale_key_map[locale_code] = keys
        all_keys.update(keys)

    return {locale: all_keys - keys for locale, keys in locale_key_map.items()}


def print_translation_summary():
    """"By accessing all .json files in the path of this file, prints a summary stating all keys that are missing in any locale"""
    for locale, missing_keys in find_missing_keys().items():
        if missing_keys:
            print(f"Locale '{locale}' is missing {len(missing_keys)} keys:")
            for key in sorted(missing_keys):
                print(f"  - {key}")
        else:
            print(f"Locale '{locale}' has all keys.")


if __name__ == "__main__":
    print_translation_summary()
