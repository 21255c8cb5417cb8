"""
配置存储模块
负责 config.json 的创建、读取、校验与保存
"""
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict

from .constants import DEFAULT_CONFIG, NAME_PARTS, PART_SUFFIX
from .errors import ConfigReadError, ConfigWriteError, MalformedConfigError
from ..utils.paths import CONFIG_FILE


logger = logging.getLogger(__name__)


@dataclass
class Config:
    """运行配置"""
    # 是否为每个标签组创建子目录
    create_directories: bool = True
    # 下载根目录
    download_directory: str = "downloads/"
    # 每个标签上次运行的日期，用于增量抓取
    last_run: Dict[str, str] = field(default_factory=dict)
    # 文件名使用的部分："id" 或 "md5"
    part_used_as_name: str = "md5"

    def to_dict(self) -> dict:
        return {
            "createDirectories": self.create_directories,
            "downloadDirectory": self.download_directory,
            "lastRun": dict(self.last_run),
            "partUsedAsName": self.part_used_as_name,
        }

    @classmethod
    def from_dict(cls, data) -> "Config":
        """从 JSON 字典构造配置

        Raises:
            MalformedConfigError: 缺少字段或字段类型不正确
        """
        if not isinstance(data, dict):
            raise MalformedConfigError("Configuration root must be a JSON object")

        missing = [key for key in DEFAULT_CONFIG if key not in data]
        if missing:
            raise MalformedConfigError(f"Configuration is missing: {', '.join(missing)}")

        create_directories = data["createDirectories"]
        download_directory = data["downloadDirectory"]
        last_run = data["lastRun"]
        part_used_as_name = data["partUsedAsName"]

        if not isinstance(create_directories, bool):
            raise MalformedConfigError("createDirectories must be a boolean")
        if not isinstance(download_directory, str):
            raise MalformedConfigError("downloadDirectory must be a string")
        if not isinstance(last_run, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in last_run.items()):
            raise MalformedConfigError("lastRun must map strings to strings")
        if part_used_as_name not in NAME_PARTS:
            raise MalformedConfigError(
                f"partUsedAsName must be one of {', '.join(NAME_PARTS)}, got {part_used_as_name!r}")

        return cls(
            create_directories=create_directories,
            download_directory=download_directory,
            last_run=dict(last_run),
            part_used_as_name=part_used_as_name,
        )


class ConfigStore:
    """config.json 的唯一所有者"""

    def __init__(self, path: str = CONFIG_FILE):
        self.path = path

    def exists(self) -> bool:
        """配置文件是否存在"""
        if not os.path.exists(self.path):
            print(f"{os.path.basename(self.path)}: does not exist!")
            return False
        return True

    def create_default(self):
        """写入默认配置

        Raises:
            ConfigWriteError: 无法序列化或创建文件
        """
        try:
            text = json.dumps(DEFAULT_CONFIG, indent=2)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(text)
        except (OSError, TypeError, ValueError) as e:
            raise ConfigWriteError(f"Could not create {self.path}: {e}") from e
        logger.info("Created default configuration at %s", self.path)

    def ensure(self):
        """配置不存在时创建默认配置（可重复调用）"""
        if not self.exists():
            print("Creating config...")
            self.create_default()

    def load(self) -> Config:
        """读取并校验配置

        Raises:
            ConfigReadError: 文件无法读取
            MalformedConfigError: 内容无法解析为配置
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise ConfigReadError(f"Could not read {self.path}: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedConfigError(f"{self.path} is not valid JSON: {e}") from e

        return Config.from_dict(data)

    def save(self, config: Config):
        """保存配置

        先写入 .part 临时文件再替换，中途失败不会破坏原有文件。

        Raises:
            ConfigWriteError: 无法写入
        """
        part_path = self.path + PART_SUFFIX
        try:
            text = json.dumps(config.to_dict(), indent=2)
            with open(part_path, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(part_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            try:
                os.remove(part_path)
            except OSError:
                pass
            raise ConfigWriteError(f"Could not save {self.path}: {e}") from e
        logger.info("Saved configuration to %s", self.path)
