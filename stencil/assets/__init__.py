from .registry import AssetRegistry, ScriptAsset, StyleAsset

__all__ = ["AssetRegistry", "ScriptAsset", "StyleAsset"]
