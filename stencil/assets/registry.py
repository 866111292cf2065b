"""Script and stylesheet bookkeeping for documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from markupsafe import Markup, escape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScriptAsset:
    """Either inline JavaScript (``code``) or an external file (``src``)."""

    code: str | None = None
    src: str | None = None

    def to_html(self) -> str:
        if self.code is None and self.src is not None:
            return f'<script src="{escape(self.src)}"></script>'
        return f"<script>\n\t{self.code or ''}\n</script>"


@dataclass(frozen=True)
class StyleAsset:
    path: str
    media: str | None = None

    def to_html(self) -> str:
        tag = f'<link href="{escape(self.path)}" rel="stylesheet"'
        if self.media is not None:
            tag += f' media="{escape(self.media)}"'
        return tag + " />"


class AssetRegistry:
    """Collects scripts and stylesheets a document prints in its head/footer.

    Scripts are ordered by weight. An entry added without a weight joins the
    highest weight registered so far. Duplicate entries are ignored.
    """

    def __init__(self) -> None:
        self._scripts: dict[int, list[ScriptAsset]] = {}
        self._styles: list[StyleAsset] = []

    def add_js(self, script: str, weight: int | None = None) -> None:
        self._add_script(ScriptAsset(code=script), weight)

    def add_js_file(self, src: str, weight: int | None = None) -> None:
        self._add_script(ScriptAsset(src=src), weight)

    def _add_script(self, asset: ScriptAsset, weight: int | None) -> None:
        if any(asset in bucket for bucket in self._scripts.values()):
            logger.debug(f"Ignoring duplicate script asset: {asset}")
            return
        if weight is None:
            weight = max(self._scripts, default=0)
        self._scripts.setdefault(weight, []).append(asset)

    def add_css(self, path: str, media: str | None = None) -> None:
        asset = StyleAsset(path=path, media=media)
        if asset in self._styles:
            logger.debug(f"Ignoring duplicate style asset: {asset}")
            return
        self._styles.append(asset)

    @property
    def scripts(self) -> list[ScriptAsset]:
        return [asset for weight in sorted(self._scripts) for asset in self._scripts[weight]]

    @property
    def styles(self) -> list[StyleAsset]:
        return list(self._styles)

    def render_js(self) -> Markup:
        return Markup("\n".join(asset.to_html() for asset in self.scripts))

    def render_css(self) -> Markup:
        return Markup("\n".join(asset.to_html() for asset in self._styles))

    def __bool__(self) -> bool:
        return bool(self._scripts or self._styles)
