"""
测试模块

此模块仅用于测试，不应在生产代码中使用。

包含:
- fixtures/: 测试夹具和数据生成器
- test_*.py: 各种测试文件

运行:
    pytest mpc_tracker/tests
"""
