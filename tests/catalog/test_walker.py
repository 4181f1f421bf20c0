"""Tests for exposes/options tree traversal."""

from meshfixtures.catalog.models import CapabilityDescriptor
from meshfixtures.catalog.walker import iterate_exposes, iterate_options


def _tree():
    return [
        CapabilityDescriptor.model_validate(
            {
                "type": "light",
                "name": "light",
                "features": [
                    {"type": "binary", "name": "state"},
                    {
                        "type": "composite",
                        "name": "color_xy",
                        "features": [{"type": "numeric", "name": "x"}, {"type": "numeric", "name": "y"}],
                    },
                ],
            }
        ),
        CapabilityDescriptor(type="numeric", name="linkquality"),
    ]


def _names(nodes, skip_root=False, walk=iterate_exposes):
    visited = []
    walk(nodes, lambda node: visited.append(node.name), skip_root)
    return visited


class TestIterateExposes:
    def test_visits_every_node_depth_first(self):
        assert _names(_tree()) == ["light", "state", "color_xy", "x", "y", "linkquality"]

    def test_skip_root_skips_only_top_level_containers(self):
        # nested composite "color_xy" is still visited
        assert _names(_tree(), skip_root=True) == ["state", "color_xy", "x", "y", "linkquality"]

    def test_skip_root_keeps_top_level_leaves(self):
        leaves = [CapabilityDescriptor(type="binary", name="a"), CapabilityDescriptor(type="enum", name="b")]
        assert _names(leaves, skip_root=True) == ["a", "b"]

    def test_empty(self):
        assert _names([]) == []


class TestIterateOptions:
    def test_same_traversal_as_exposes(self):
        assert _names(_tree(), walk=iterate_options) == _names(_tree())
        assert _names(_tree(), skip_root=True, walk=iterate_options) == _names(_tree(), skip_root=True)
