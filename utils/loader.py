"""
Module used to import families of collections from JSON files
"""

import json
import os

from constants import DATA


def path_to_document(path: str) -> object:
    with open(os.path.join(DATA, path), "r") as file:
        data = json.load(file)
    return data


def load_family(path: str) -> list[list]:
    """
    Reads a family of collections, relative to the data directory.

    The document is either a list of lists or an object whose "collections"
    entry is one.

    Args:
        path: File name under `constants.DATA`.

    Raises:
        ValueError: If the document does not hold a list of lists.
    """
    data = path_to_document(path)

    if isinstance(data, dict):
        if "collections" not in data:
            raise ValueError(f"Error: no 'collections' entry in {path}")
        data = data["collections"]

    if not isinstance(data, list) or not all(
        isinstance(collection, list) for collection in data
    ):
        raise ValueError(f"Error: {path} does not hold a list of lists")

    return data
