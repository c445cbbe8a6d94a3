"""安装清单读写

每个已安装包在其安装目录旁有一个 <name>.json:
    {"name": <name>, "Version": <version>}
仅用于幂等检查，不作为依赖图的数据来源。
"""

from __future__ import annotations

import logging
from pathlib import Path

from easypm.utils.file_io import load_json, save_json

logger = logging.getLogger(__name__)


class ManifestStore:
    """安装清单存取"""

    @staticmethod
    def path_for(folder: Path, name: str) -> Path:
        return folder / f"{name}.json"

    def read_version(self, folder: Path, name: str) -> str | None:
        """读取已安装版本

        文件缺失、损坏或字段无效都视为"未安装"，返回 None。
        """
        path = self.path_for(folder, name)
        try:
            data = load_json(path)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.debug("安装清单无效，按未安装处理: %s (%s)", path, e)
            return None
        if not isinstance(data, dict):
            logger.debug("安装清单不是对象，按未安装处理: %s", path)
            return None
        version = data.get("Version")
        return version if isinstance(version, str) else None

    def is_installed(self, folder: Path, name: str, version: str) -> bool:
        return self.read_version(folder, name) == version

    def write(self, folder: Path, name: str, version: str) -> Path:
        path = self.path_for(folder, name)
        save_json(path, {"name": name, "Version": version})
        return path
