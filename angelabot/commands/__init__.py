"""内置命令模块，按分类存放，由命令注册器在启动时扫描加载。"""
