"""pushbot - 跨仓库依赖版本推送工具"""

__version__ = "0.1.0"
