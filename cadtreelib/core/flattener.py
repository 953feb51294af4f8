"""Flattening builder for cadtreelib ("flatten" mode).

Instead of nesting, every object that directly owns parameters becomes one
group node named by its path from the part root (``Geo1/Sub/Feat1``). The
groups are listed flat under the part node, in pre-order. Objects without
parameters produce no group of their own but are still descended into.

Reference planes of the part and mechanical tool helpers are skipped at
every depth.
"""

import logging
from typing import Any, List, Optional

from ..config import ExportMode
from .events import EventCode
from .handle import CadHandle
from .node import NormalizedNode
from .traverser import TreeBuilder


class FlatteningTraverser(TreeBuilder):
    """Builds a path-keyed, flat listing of parameter groups."""

    mode = ExportMode.FLATTEN

    def build(self, part: CadHandle, start_depth: int = 0) -> Optional[NormalizedNode]:
        if part is None:
            return None

        view = self.adapter.view(part, part, self.sink)
        root = NormalizedNode.structural(view.name(), view.kind())
        if not self.config.should_explore(start_depth):
            return root

        planes = self._origin_planes(part, root.name)
        for child in view.children():
            if self.adapter.is_parameter(child) or self._excluded(child, planes):
                continue
            try:
                self._walk(part, child, "", start_depth + 1, planes, root.children)
            except Exception as exc:
                self._child_failed(root.name, exc)

        return root

    def _walk(self,
              part: CadHandle,
              handle: CadHandle,
              prefix: str,
              depth: int,
              planes: List[Any],
              out: List[NormalizedNode]) -> None:
        """Emit the group for ``handle`` (if any), then descend.

        Args:
            part: Root part, scopes parameter lookups
            handle: Object being visited
            prefix: Path of the parent, empty at the first level
            depth: Depth of ``handle``, part root = 0
            planes: Origin planes to exclude
            out: Flat result list
        """
        view = self.adapter.view(part, handle, self.sink)
        name = view.name()
        path = f"{prefix}/{name}" if prefix else name

        structural: List[CadHandle] = []
        parameters: List[CadHandle] = []
        for child in view.children():
            if self.adapter.is_parameter(child):
                parameters.append(child)
            elif not self._excluded(child, planes):
                structural.append(child)

        if parameters:
            group = NormalizedNode.structural(path, view.kind())
            for parameter in parameters:
                group.add_child(self.parameter_leaf(self.adapter.view(part, parameter, self.sink)))
            out.append(group)

        if not self.config.should_explore(depth):
            return
        if self._ceiling_reached(depth, path):
            return

        for child in structural:
            try:
                self._walk(part, child, path, depth + 1, planes, out)
            except Exception as exc:
                self._child_failed(path, exc)

    def _origin_planes(self, part: CadHandle, subject: str) -> List[Any]:
        try:
            return [plane for plane in self.adapter.origin_planes(part) if plane is not None]
        except Exception as exc:
            self.sink.report(
                EventCode.ORIGIN_UNRESOLVED,
                "origin planes unavailable, not filtering reference planes",
                level=logging.DEBUG,
                subject=subject,
                error=exc,
            )
            return []

    def _excluded(self, handle: CadHandle, planes: List[Any]) -> bool:
        if self.adapter.is_tool_artifact(handle):
            return True
        return any(handle.same_object(plane) for plane in planes)
