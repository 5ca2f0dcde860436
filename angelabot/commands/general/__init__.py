"""通用命令。"""
