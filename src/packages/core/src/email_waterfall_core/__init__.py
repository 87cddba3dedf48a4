"""Email waterfall validation core."""
