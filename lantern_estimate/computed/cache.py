"""
派生结果缓存

以 (结果名称, trace对象身份) 为键缓存异步计算。
并发请求同一个键时共享同一个 asyncio 任务；
失败的计算同样被缓存，后续请求会抛出相同的异常。
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ComputedArtifactCache:
    """单次分析运行内的派生结果缓存"""

    def __init__(self):
        # 条目中持有key对象本身，保证运行期间其id不会被复用
        self._entries: Dict[Tuple[str, int], Tuple[Any, "asyncio.Future[Any]"]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Tuple[str, Any]) -> bool:
        artifact_name, key_obj = key
        return (artifact_name, id(key_obj)) in self._entries

    async def request(self, artifact_name: str, key_obj: Any,
                      compute: Callable[[], Awaitable[T]]) -> T:
        """
        获取派生结果，未缓存时调用 compute 计算

        Args:
            artifact_name: 结果名称
            key_obj: 计算所依据的对象（通常是trace）
            compute: 返回awaitable的计算函数

        Returns:
            计算结果
        """
        key = (artifact_name, id(key_obj))
        entry = self._entries.get(key)

        if entry is None:
            logger.debug("Computing %s", artifact_name)
            future = asyncio.ensure_future(compute())
            self._entries[key] = (key_obj, future)
        else:
            logger.debug("Cache hit for %s", artifact_name)
            future = entry[1]

        # 单个调用方被取消时不取消共享任务
        return await asyncio.shield(future)

    def clear(self) -> None:
        """清空缓存"""
        self._entries.clear()
