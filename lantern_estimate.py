#!/usr/bin/env python3
"""
Lantern-Estimate 项目入口脚本

支持不安装包直接在项目根目录运行。
"""

import sys

from lantern_estimate.cli.commands import main

if __name__ == "__main__":
    sys.exit(main())
