"""
命令注册系统

扫描命令目录并建立按名称索引的命令表：
- 两级目录结构：分类文件夹 / 命令模块文件
- 按模块声明的类型分类（双模式 / 仅前缀 / 无效）
- 收集需要发布的Slash命令描述符
"""

import importlib.util
import logging
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType, ModuleType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .command import CommandDefinition, CommandKind
from .errors import CommandDefinitionError

MODULE_NAMESPACE = "angelabot_commands"


@dataclass
class LoadReport:
    """
    一次目录扫描的结果

    Attributes:
        loaded: 本次成功加载的命令定义（按扫描顺序）
        invalid: 被跳过的模块路径及原因
        slash_payloads: 注册表中全部双模式命令的Slash描述符
    """
    loaded: List[CommandDefinition] = field(default_factory=list)
    invalid: List[Tuple[Path, CommandDefinitionError]] = field(default_factory=list)
    slash_payloads: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def valid_slash_count(self) -> int:
        return sum(1 for definition in self.loaded if definition.kind is CommandKind.DUAL)

    @property
    def invalid_count(self) -> int:
        return len(self.invalid)


class CommandRegistry:
    """
    命令注册器

    启动时加载一次，之后只读。同名命令以最后加载的为准。
    """

    def __init__(self):
        """初始化命令注册器"""
        self.logger = logging.getLogger("angelabot.registry")
        self._commands: Dict[str, CommandDefinition] = {}
        self._sources: Dict[str, str] = {}

        self.logger.debug("命令注册器已初始化")

    @property
    def commands(self) -> Mapping[str, CommandDefinition]:
        """只读的命令表视图"""
        return MappingProxyType(self._commands)

    def get(self, name: str) -> Optional[CommandDefinition]:
        """
        按名称查找命令

        Args:
            name: 命令名称

        Returns:
            命令定义或None
        """
        return self._commands.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def register(self, definition: CommandDefinition, source: Optional[str] = None) -> None:
        """
        注册一个命令定义，同名命令会被覆盖

        Args:
            definition: 已命名的命令定义
            source: 定义来源（通常是模块文件名），用于日志

        Raises:
            CommandDefinitionError: 命令定义缺少名称
        """
        if not definition.name:
            raise CommandDefinitionError("命令定义缺少名称", source=source)

        source = source or "<direct>"
        previous = self._sources.get(definition.name)
        if previous is not None and previous != source:
            self.logger.warning(
                f"⚠️ 命令名称冲突: {definition.name} {previous} 被 {source} 覆盖"
            )

        self._commands[definition.name] = definition
        self._sources[definition.name] = source

    def slash_payloads(self) -> List[Dict[str, Any]]:
        """
        获取所有双模式命令的Slash描述符

        Returns:
            按加载顺序排列的 Discord 应用命令 JSON 列表
        """
        return [
            definition.schema.to_payload()
            for definition in self._commands.values()
            if definition.kind is CommandKind.DUAL
        ]

    def load_all(self, root: Union[str, Path]) -> LoadReport:
        """
        扫描命令目录并加载所有命令模块

        Args:
            root: 命令根目录，其直接子目录为分类文件夹

        Returns:
            扫描结果
        """
        root = Path(root)
        report = LoadReport()

        if not root.is_dir():
            self.logger.error(f"命令目录不存在: {root}")
            return report

        for folder in sorted(p for p in root.iterdir() if p.is_dir()):
            for path in sorted(folder.glob("*.py")):
                if path.name.startswith("_"):
                    continue
                self._load_file(folder.name, path, report)

        report.slash_payloads = self.slash_payloads()

        self.logger.info(f"👑 已注册 {report.valid_slash_count} 个有效Slash命令")
        if report.invalid_count > 0:
            self.logger.warning(f"⚠️ 跳过了 {report.invalid_count} 个无效命令模块")

        return report

    def _load_file(self, category: str, path: Path, report: LoadReport) -> None:
        try:
            module = self._import_module(category, path)
        except Exception as e:
            error = CommandDefinitionError(f"导入失败: {e}", path=str(path))
            report.invalid.append((path, error))
            self.logger.error(f"⚠️ 命令文件 {path.name} 导入失败: {e}", exc_info=True)
            return

        definition = getattr(module, "command", None)
        if not isinstance(definition, CommandDefinition):
            error = CommandDefinitionError("缺少 'command' 定义", path=str(path))
            report.invalid.append((path, error))
            self.logger.warning(f"⚠️ 命令文件 {path.name} 缺少 'command' 定义")
            return

        if definition.kind is CommandKind.PREFIX_ONLY and not definition.name:
            definition = definition.with_name(path.stem.lower())

        try:
            self.register(definition, source=f"{category}/{path.name}")
        except CommandDefinitionError as e:
            report.invalid.append((path, e))
            self.logger.warning(f"⚠️ 命令文件 {path.name} 无效: {e}")
            return

        report.loaded.append(definition)

        label = "🚀 Slash & Prefix" if definition.kind is CommandKind.DUAL else "🧃 Prefix Only"
        self.logger.info(f"👾 已加载命令: {path.name} [{label}]")

    def _import_module(self, category: str, path: Path) -> ModuleType:
        module_name = ".".join(
            re.sub(r"\W", "_", part) for part in (MODULE_NAMESPACE, category, path.stem)
        )
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"无法为 {path} 创建模块规格")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise
        return module
