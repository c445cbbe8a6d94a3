"""easypm - 原生代码多包仓库的依赖包管理器

按清单解析包及其传递依赖，拉取源码并生成供 make 使用的构建片段。
"""

__version__ = "0.3.0"
