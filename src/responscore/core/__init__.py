"""ResponScore Core -- 反应计分引擎

领域模型、评分规则、状态机、持久化与业务服务。
"""
