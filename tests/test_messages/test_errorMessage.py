# tests/test_messages/test_errorMessage.py
"""ErrorMessage 单元测试"""

from dexchart.indicators import IndicatorKind
from dexchart.messages import ErrorMessage, MessageBuilder


class TestMessageBuilder:
    """MessageBuilder 构建器测试"""

    def test_build_with_params(self):
        """测试带参数的消息构建"""
        builder = MessageBuilder("周期必须 >= 1, 当前值: {period}")
        result = builder.indicator("RSI").build(period=0)

        assert result == "RSI: 周期必须 >= 1, 当前值: 0"

    def test_indicator_enum_prefix(self):
        """测试以枚举值作为前缀"""
        builder = MessageBuilder("缺少指标参数").indicator(IndicatorKind.BOLLINGER_BANDS)

        assert builder.build() == "Bollinger Bands: 缺少指标参数"

    def test_build_without_indicator_is_generic(self):
        """测试未设置指标时返回通用消息"""
        assert MessageBuilder("测试消息").build() == "测试消息"

    def test_chain_returns_new_instance(self):
        """测试链式调用返回新实例 (不可变性)"""
        builder = MessageBuilder("测试")
        new_builder = builder.indicator("ADX")

        assert new_builder is not builder
        assert new_builder._indicator == "ADX"
        assert builder._indicator is None

    def test_str(self):
        """测试 __str__ 方法"""
        builder = MessageBuilder("缺少指标参数")

        assert str(builder) == "缺少指标参数"
        assert str(builder.indicator("MACD")) == "MACD: 缺少指标参数"


class TestMessageBuilderContext:
    """MessageBuilder 上下文功能测试"""

    def test_ctx_add_variable(self):
        """测试添加通用上下文变量"""
        msg = MessageBuilder("期望 {expected}, 实际 {actual}").ctx(expected="int").ctx(actual="str")

        assert msg.build() == "期望 int, 实际 str"

    def test_build_kwargs_override_ctx(self):
        """测试 build 参数优先于上下文"""
        msg = MessageBuilder("{period}").ctx(period=1)

        assert msg.build(period=2) == "2"

    def test_ctx_preserves_indicator(self):
        """测试 ctx 保留指标前缀"""
        msg = MessageBuilder("{period}").indicator("RSI").ctx(period=3)

        assert msg.build() == "RSI: 3"


class TestErrorMessage:
    """ErrorMessage 模板目录测试"""

    def test_builder_templates(self):
        """测试链式模板"""
        assert ErrorMessage.INVALID_PERIOD.indicator("ADX").build(period=0) == "ADX: 周期必须 >= 1, 当前值: 0"

    def test_validation_messages_are_english(self):
        """测试参数校验文案与前端一致"""
        assert ErrorMessage.PARAM_OUT_OF_RANGE.format(min=2, max=100) == "Value must be between 2 and 100"
        assert ErrorMessage.PERIODS_OUT_OF_RANGE.format(min=1, max=500) == "Periods must be between 1 and 500"

    def test_static_format_with_builder(self):
        """测试静态方法接受 MessageBuilder"""
        result = ErrorMessage.format(ErrorMessage.INVALID_PERIOD, IndicatorKind.RSI, period=-1)

        assert result == "RSI: 周期必须 >= 1, 当前值: -1"

    def test_static_format_with_str(self):
        """测试静态方法接受字符串模板"""
        result = ErrorMessage.format(ErrorMessage.TOO_MANY_BARS, count=10, limit=5)

        assert result == "K 线数量超过上限: 10 > 5"
