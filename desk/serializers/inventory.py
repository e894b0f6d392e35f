from rest_framework import serializers


class MedicineSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    category = serializers.CharField()
    currentStock = serializers.IntegerField(source='current_stock')
    minimumThreshold = serializers.IntegerField(source='minimum_threshold')
    unit = serializers.CharField()


class StrictIntegerField(serializers.IntegerField):
    """Integer field that refuses strings and booleans instead of coercing them."""
    default_error_messages = {
        'invalid': 'Quantity must be a number.',
    }

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail('invalid')
        return super().to_internal_value(data)


class StockUpdateSerializer(serializers.Serializer):
    # Signed delta; negative values dispense stock
    quantity = StrictIntegerField()
