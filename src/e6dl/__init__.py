"""
e6dl - 基于标签的 e621 批量下载器
"""
__version__ = "1.0.0"
