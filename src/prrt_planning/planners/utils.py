from decimal import Decimal, localcontext, ROUND_DOWN


def val2str(value, decimal_places=8):
    """
    Names a state by its truncated coordinates. Used as the 'name' vertex attribute of planner graphs.
    """
    def trunc(number, places=decimal_places):
        if not isinstance(places, int):
            raise ValueError("Decimal places must be an integer.")
        if places < 1:
            raise ValueError("Decimal places must be at least 1.")

        with localcontext() as context:
            context.rounding = ROUND_DOWN
            exponent = Decimal(str(10 ** - places))
            return Decimal(str(float(number))).quantize(exponent).to_eng_string()
    return str([trunc(num, decimal_places) for num in value])
