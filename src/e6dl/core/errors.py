"""
异常定义
所有错误都继承自 E6dlError，便于入口统一捕获
"""


class E6dlError(Exception):
    """e6dl 所有错误的基类"""


# === 配置 ===
class ConfigError(E6dlError):
    """配置文件缺失、无法读取或格式不正确"""


class MalformedConfigError(ConfigError):
    """配置文件内容无法解析为预期结构"""


class ConfigReadError(ConfigError):
    """配置文件无法读取"""


class ConfigWriteError(ConfigError):
    """配置文件无法创建或写入"""


# === 网络 ===
class FetchError(E6dlError):
    """下载文件或请求API失败"""

    def __init__(self, message: str, url: str = None, status_code: int = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


# === 下载 ===
class DownloadError(E6dlError):
    """下载流程中的本地错误"""


class WriteFailedError(DownloadError):
    """目标目录或文件无法创建、写入"""

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path


# === 抓取 ===
class GrabError(E6dlError):
    """无法将标签组解析为帖子"""
