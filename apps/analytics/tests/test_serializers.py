from apps.analytics.serializers import ChartQuerySerializer, DaysQuerySerializer


class TestDaysQuerySerializer:

    def test_default(self):
        serializer = DaysQuerySerializer(data={})

        assert serializer.is_valid()
        assert serializer.validated_data['days'] == 7

    def test_bounds(self):
        assert not DaysQuerySerializer(data={'days': 0}).is_valid()
        assert not DaysQuerySerializer(data={'days': 366}).is_valid()
        assert DaysQuerySerializer(data={'days': '30'}).is_valid()


class TestChartQuerySerializer:

    def test_defaults(self):
        serializer = ChartQuerySerializer(data={})

        assert serializer.is_valid()
        assert serializer.validated_data == {'days': 7, 'granularity': 'day'}

    def test_invalid_granularity(self):
        serializer = ChartQuerySerializer(data={'granularity': 'month'})

        assert not serializer.is_valid()
        assert 'granularity' in serializer.errors
