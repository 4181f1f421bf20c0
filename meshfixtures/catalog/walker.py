"""Recursive traversal over exposes/options descriptor trees."""

from collections.abc import Callable, Iterable

from meshfixtures.catalog.models import CapabilityDescriptor, OptionDescriptor


def iterate_exposes(
    exposes: Iterable[CapabilityDescriptor],
    fn: Callable[[CapabilityDescriptor], None],
    skip_root: bool = False,
) -> None:
    """Call ``fn`` on every descriptor of the tree, depth-first.

    Args:
        exposes: Top-level descriptors.
        fn: Callback invoked once per visited descriptor.
        skip_root: Skip the callback on top-level descriptors that have
            ``features``. Their children are always visited.
    """
    for expose in exposes:
        if not skip_root or not expose.features:
            fn(expose)

        if expose.features:
            iterate_exposes(expose.features, fn)


def iterate_options(
    options: Iterable[OptionDescriptor],
    fn: Callable[[OptionDescriptor], None],
    skip_root: bool = False,
) -> None:
    """Same traversal as ``iterate_exposes``, over a definition's options tree."""
    iterate_exposes(options, fn, skip_root)
