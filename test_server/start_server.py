#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
测试服务器启动脚本
启动本地模拟论坛，并可选地跑一次完整转换
"""

import argparse
import subprocess
import sys
import time
from pathlib import Path

START_URL = "http://localhost:8080/r/testfic/comments/p1/part_1/"


def start_server() -> subprocess.Popen:
    """在子进程中启动测试服务器"""
    server_file = Path(__file__).parent / "app.py"
    if not server_file.exists():
        raise FileNotFoundError(f"找不到服务器文件 {server_file}")

    print("🚀 正在启动测试服务器...")
    print("📍 服务器地址：http://localhost:8080")
    process = subprocess.Popen([sys.executable, str(server_file)])
    # 等待服务器启动
    time.sleep(3)
    return process


def run_demo(output: str) -> int:
    """用模拟论坛跑一次转换，不读写磁盘缓存"""
    command = [sys.executable, "-m", "reddit_epub.cli", "-t", "测试连载",
               "--no-cache", "-o", output, START_URL]
    print(f"📚 执行: {' '.join(command)}")
    return subprocess.call(command)


def main():
    parser = argparse.ArgumentParser(description="🧪 本地测试服务器启动器")
    parser.add_argument('--demo', metavar='OUTPUT', help='启动后立即转换并写出到该文件')
    args = parser.parse_args()

    process = start_server()
    try:
        if args.demo:
            return run_demo(args.demo)

        print("\n✅ 测试服务器已启动！")
        print(f"💡 现在可以运行: reddit-epub -t 测试连载 -o test.epub {START_URL}")
        print("🛑 按 Ctrl+C 停止服务器")
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n👋 服务器已停止")
        return 0
    finally:
        process.terminate()


if __name__ == "__main__":
    sys.exit(main())
