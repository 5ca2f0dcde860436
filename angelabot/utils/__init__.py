"""AngelaBot 工具模块。"""
