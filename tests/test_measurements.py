import locale
import unittest

from lxml import etree as etree_

from hvtypes.exceptions import OutOfRangeError, ThingSerializationError, XmlParseError
from hvtypes.item_types import measurements
from hvtypes.item_types.display_value import DisplayValue


class TestDisplayValue(unittest.TestCase):

    def setUp(self):
        self._locale = locale.setlocale(locale.LC_NUMERIC)
        locale.setlocale(locale.LC_NUMERIC, 'C')

    def tearDown(self):
        locale.setlocale(locale.LC_NUMERIC, self._locale)

    def test_round_trip(self):
        display = DisplayValue(160.0, 'lb', units_code='lb', text='160 pounds')
        node = display.write_xml('display')
        self.assertEqual(node.text, '160')
        self.assertEqual(node.get('units'), 'lb')
        self.assertEqual(node.get('units-code'), 'lb')
        self.assertEqual(node.get('text'), '160 pounds')
        self.assertEqual(DisplayValue.from_node(node), display)

    def test_optional_attributes(self):
        node = DisplayValue(1.5, 'cm').write_xml('display')
        self.assertEqual(dict(node.attrib), {'units': 'cm'})
        display = DisplayValue.from_node(node)
        self.assertIsNone(display.units_code)
        self.assertIsNone(display.text)

    def test_units_mandatory(self):
        self.assertRaises(ThingSerializationError, DisplayValue(1.0).write_xml, 'display')

    def test_str(self):
        self.assertEqual(str(DisplayValue(1.5, 'cm')), '1.5 cm')
        self.assertEqual(str(DisplayValue(1.5, 'cm', text='one and a half')), 'one and a half')

    def test_parse_missing_value(self):
        node = etree_.fromstring('<display units="cm"/>')
        self.assertRaises(XmlParseError, DisplayValue.from_node, node)


class TestMeasurements(unittest.TestCase):

    def test_flow_bounds(self):
        self.assertRaises(OutOfRangeError, measurements.FlowMeasurement, 0.0)
        self.assertRaises(OutOfRangeError, measurements.FlowMeasurement, -1.0)
        flow = measurements.FlowMeasurement(1.5)
        self.assertEqual(flow.value, 1.5)
        with self.assertRaises(OutOfRangeError):
            flow.value = 0.0
        self.assertEqual(flow.value, 1.5)

    def test_bounds(self):
        non_negative = (measurements.Length, measurements.WeightValue, measurements.VolumeMeasurement,
                        measurements.ConcentrationMeasurement, measurements.BloodGlucoseMeasurement,
                        measurements.PressureMeasurement, measurements.SpeedMeasurement,
                        measurements.PowerMeasurement)
        for cls in non_negative:
            self.assertEqual(cls(0.0).value, 0.0)
            self.assertRaises(OutOfRangeError, cls, -0.1)
        self.assertEqual(measurements.TemperatureMeasurement(36.6).value, 36.6)
        self.assertRaises(OutOfRangeError, measurements.TemperatureMeasurement, 0.0)
        self.assertRaises(OutOfRangeError, measurements.TemperatureMeasurement, -5.0)
        self.assertRaises(OutOfRangeError, measurements.Length, float('nan'))

    def test_value_is_mandatory(self):
        self.assertRaises(ThingSerializationError, measurements.Length().write_xml, 'value')
        with self.assertRaises(OutOfRangeError):
            measurements.Length(1.0).value = None

    def test_base_unit_elements(self):
        expected = {measurements.Length: 'm',
                    measurements.WeightValue: 'kg',
                    measurements.TemperatureMeasurement: 'celsius',
                    measurements.FlowMeasurement: 'liters-per-second',
                    measurements.VolumeMeasurement: 'liters',
                    measurements.ConcentrationMeasurement: 'mmolPerL',
                    measurements.BloodGlucoseMeasurement: 'mmolPerL',
                    measurements.PressureMeasurement: 'kPa',
                    measurements.SpeedMeasurement: 'meters-per-second',
                    measurements.PowerMeasurement: 'watts'}
        for cls, element_name in expected.items():
            node = cls(2.5).write_xml('value')
            self.assertEqual([child.tag for child in node], [element_name])
            self.assertEqual(node[0].text, '2.5')

    def test_round_trip_with_display(self):
        weight = measurements.WeightValue(72.5, DisplayValue(160.0, 'lb', 'lb'))
        node = weight.write_xml('value')
        self.assertEqual([child.tag for child in node], ['kg', 'display'])
        weight2 = measurements.WeightValue.from_node(node)
        self.assertEqual(weight2, weight)
        self.assertEqual(weight2.display.units, 'lb')

    def test_parse(self):
        node = etree_.fromstring('<pef><liters-per-second>6.5</liters-per-second></pef>')
        flow = measurements.FlowMeasurement.from_node(node)
        self.assertEqual(flow.value, 6.5)
        self.assertIsNone(flow.display)
        node = etree_.fromstring('<pef><liters>6.5</liters></pef>')
        self.assertRaises(XmlParseError, measurements.FlowMeasurement.from_node, node)

    def test_str(self):
        previous = locale.setlocale(locale.LC_NUMERIC)
        try:
            locale.setlocale(locale.LC_NUMERIC, 'C')
            length = measurements.Length(1.75)
            self.assertEqual(length.get_value_string(), '1.75 m')
            self.assertEqual(str(length), '1.75 m')
            length.display = DisplayValue(175.0, 'cm')
            self.assertEqual(str(length), '175 cm')
        finally:
            locale.setlocale(locale.LC_NUMERIC, previous)
