"""
e6dl 应用程序入口点
"""
import sys

from e6dl.console import main

sys.exit(main())
