"""业务服务

所有函数显式接收当前用户 ID，不依赖请求上下文。
"""
