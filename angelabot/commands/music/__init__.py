"""音乐命令。"""
