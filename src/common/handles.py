"""
Handle Utilities

Builds URL handles for products and categories from their names.
"""

import re

_NON_ALNUM = re.compile(r'[^a-z0-9]+')


def slugify(text: str) -> str:
    """
    Convert text to a lowercase slug.

    Every run of characters outside ``[a-z0-9]`` (after lowercasing)
    becomes a single hyphen. Leading and trailing hyphens are kept.

    Example:
        >>> slugify("Home Decoration")
        'home-decoration'
        >>> slugify("Men's Shirts!")
        'men-s-shirts-'
    """
    return _NON_ALNUM.sub('-', text.lower())


def category_handle(name: str) -> str:
    """
    Generate the handle a category name is stored under.

    Categories are looked up by this handle, so two names that slug
    to the same value resolve to the same category.

    Example:
        >>> category_handle("Womens Bags")
        'womens-bags'
    """
    return slugify(name)


def generate_handle(title: str, suffix: str = '') -> str:
    """
    Generate URL-friendly product handle from title.

    Args:
        title: Product title
        suffix: Optional suffix appended after a hyphen (e.g. the external id)

    Returns:
        URL-friendly handle

    Example:
        >>> generate_handle("Essence Mascara Lash Princess", suffix="1")
        'essence-mascara-lash-princess-1'
    """
    handle = slugify(title).strip('-')
    if suffix:
        return f"{handle}-{suffix}"
    return handle
