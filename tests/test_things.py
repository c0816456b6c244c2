import unittest
import uuid

from hvtypes.exceptions import OutOfRangeError, ThingSerializationError, XmlParseError
from hvtypes.item_types.approximate import ApproximateDate, ApproximateDateTime
from hvtypes.item_types.approximate import ApproximateTime
from hvtypes.item_types.codable import CodableValue, CodedValue
from hvtypes.item_types.dates import HealthServiceDate, HealthServiceDateTime
from hvtypes.item_types.display_value import DisplayValue
from hvtypes.item_types.measurements import (
    BloodGlucoseMeasurement,
    FlowMeasurement,
    Length,
    VolumeMeasurement,
    WeightValue,
)
from hvtypes.things import (
    BloodGlucose,
    BloodPressure,
    BodyDimension,
    HeartRate,
    Height,
    Immunization,
    Normalcy,
    PeakFlow,
    Weight,
)


def _when():
    return HealthServiceDateTime(HealthServiceDate(2020, 6, 1), ApproximateTime(8, 0))


class TestThings(unittest.TestCase):

    def _round_trip(self, thing):
        xml_text = thing.to_xml_string()
        thing2 = thing.__class__.from_xml(xml_text)
        self.assertEqual(thing, thing2)
        return thing2

    def test_type_ids(self):
        self.assertEqual(Weight.TYPE_ID, uuid.UUID('3d34d87e-7fc1-4153-800f-f56592cb0d17'))
        self.assertEqual(Immunization.TYPE_ID, uuid.UUID('cd3587b5-b6e1-4565-ab3b-1c3ad45eb04f'))
        type_ids = {cls.TYPE_ID for cls in (Weight, Height, BloodPressure, HeartRate, BloodGlucose, PeakFlow,
                                            BodyDimension, Immunization)}
        self.assertEqual(len(type_ids), 8)

    def test_weight(self):
        weight = Weight(_when(), WeightValue(72.5, DisplayValue(160.0, 'lb')))
        node = weight.to_xml()
        self.assertEqual(node.tag, 'weight')
        self.assertEqual([child.tag for child in node], ['when', 'value'])
        self.assertEqual(node.find('value/kg').text, '72.5')
        weight2 = self._round_trip(weight)
        self.assertEqual(weight2.value.display.units, 'lb')
        self.assertEqual(str(weight2), '160 lb')

    def test_weight_defaults_to_now(self):
        weight = Weight(value=WeightValue(70.0))
        self.assertIsNotNone(weight.when)
        self.assertRaises(ThingSerializationError, Weight().to_xml_string)

    def test_height(self):
        self._round_trip(Height(_when(), Length(1.8)))

    def test_wrong_root_element(self):
        xml_text = Height(_when(), Length(1.8)).to_xml_string()
        self.assertRaises(XmlParseError, Weight.from_xml, xml_text)
        self.assertRaises(XmlParseError, Weight.from_xml, '<weight><when>')

    def test_blood_pressure(self):
        blood_pressure = BloodPressure(_when(), 120, 80)
        node = blood_pressure.to_xml()
        self.assertEqual([child.tag for child in node], ['when', 'systolic', 'diastolic'])
        blood_pressure.pulse = 60
        blood_pressure.irregular_heartbeat_detected = False
        node = blood_pressure.to_xml()
        self.assertEqual([child.tag for child in node],
                         ['when', 'systolic', 'diastolic', 'pulse', 'irregular-heartbeat'])
        self._round_trip(blood_pressure)
        self.assertEqual(str(blood_pressure), '120/80')
        self.assertRaises(OutOfRangeError, setattr, blood_pressure, 'systolic', -1)

    def test_blood_pressure_missing_mandatory(self):
        xml_text = ('<blood-pressure><when><date><y>2020</y><m>1</m><d>1</d></date></when>'
                    '<systolic>120</systolic></blood-pressure>')
        self.assertRaises(XmlParseError, BloodPressure.from_xml, xml_text)

    def test_blood_pressure_malformed_boolean(self):
        xml_text = ('<blood-pressure><when><date><y>2020</y><m>1</m><d>1</d></date></when>'
                    '<systolic>120</systolic><diastolic>80</diastolic>'
                    '<irregular-heartbeat>{}</irregular-heartbeat></blood-pressure>')
        self.assertTrue(BloodPressure.from_xml(xml_text.format('1')).irregular_heartbeat_detected)
        self.assertRaises(XmlParseError, BloodPressure.from_xml, xml_text.format('TRUE'))

    def test_heart_rate(self):
        heart_rate = HeartRate(_when(), 72)
        heart_rate.measurement_method = CodableValue('pulse oximeter')
        heart_rate.measurement_flags = CodableValue()  # empty, not written
        node = heart_rate.to_xml()
        self.assertEqual([child.tag for child in node], ['when', 'value', 'measurement-method'])
        heart_rate2 = HeartRate.from_xml(node)
        self.assertEqual(heart_rate2.value, 72)
        self.assertEqual(heart_rate2.measurement_method.text, 'pulse oximeter')
        self.assertIsNone(heart_rate2.measurement_flags)

    def test_blood_glucose(self):
        blood_glucose = BloodGlucose(_when(), BloodGlucoseMeasurement(5.5),
                                     CodableValue('Whole blood', CodedValue('wb', 'glucose-measurement-type')))
        blood_glucose.is_control_test = False
        blood_glucose.normalcy = Normalcy.NORMAL
        node = blood_glucose.to_xml()
        self.assertEqual([child.tag for child in node],
                         ['when', 'value', 'glucose-measurement-type', 'is-control-test', 'normalcy'])
        self.assertEqual(node.find('normalcy').text, '3')
        self.assertEqual(node.find('value/mmolPerL').text, '5.5')
        self._round_trip(blood_glucose)

        blood_glucose.normalcy = Normalcy.UNKNOWN
        self.assertIsNone(blood_glucose.to_xml().find('normalcy'))

    def test_blood_glucose_normalcy_out_of_range(self):
        xml_text = ('<blood-glucose><when><date><y>2020</y><m>1</m><d>1</d></date></when>'
                    '<value><mmolPerL>5</mmolPerL></value>'
                    '<glucose-measurement-type><text>Plasma</text></glucose-measurement-type>'
                    '<normalcy>9</normalcy></blood-glucose>')
        blood_glucose = BloodGlucose.from_xml(xml_text)
        self.assertEqual(blood_glucose.normalcy, Normalcy.UNKNOWN)
        self.assertEqual(blood_glucose.value.value, 5.0)

    def test_blood_glucose_type_mandatory(self):
        blood_glucose = BloodGlucose(_when(), BloodGlucoseMeasurement(5.5))
        self.assertRaises(ThingSerializationError, blood_glucose.to_xml)

    def test_peak_flow(self):
        peak_flow = PeakFlow(ApproximateDateTime(ApproximateDate(2020, 6)))
        peak_flow.peak_expiratory_flow = FlowMeasurement(6.5)
        peak_flow.forced_expiratory_volume1 = VolumeMeasurement(3.2)
        peak_flow.measurement_flags.append(CodableValue('after exercise'))
        peak_flow.measurement_flags.append(CodableValue('sitting'))
        node = peak_flow.to_xml()
        self.assertEqual([child.tag for child in node],
                         ['when', 'pef', 'fev1', 'measurement-flags', 'measurement-flags'])
        peak_flow2 = self._round_trip(peak_flow)
        self.assertEqual(len(peak_flow2.measurement_flags), 2)
        self.assertIsNone(peak_flow2.forced_expiratory_volume6)

    def test_body_dimension(self):
        body_dimension = BodyDimension(ApproximateDateTime(description='this morning'),
                                       CodableValue('waist'), Length(0.85))
        node = body_dimension.to_xml()
        self.assertEqual([child.tag for child in node], ['when', 'measurement-name', 'value'])
        self.assertEqual(node.find('when/descriptive').text, 'this morning')
        self._round_trip(body_dimension)

    def test_immunization(self):
        immunization = Immunization(CodableValue('MMR'))
        node = immunization.to_xml()
        self.assertEqual([child.tag for child in node], ['name'])

        immunization.date_administrated = ApproximateDateTime(ApproximateDate(1990, 3))
        immunization.manufacturer = CodableValue('ACME')
        immunization.lot = 'L-123'
        immunization.expiration_date = ApproximateDate(1991)
        immunization.sequence = 'first'
        immunization.consent = 'yes'
        node = immunization.to_xml()
        self.assertEqual([child.tag for child in node],
                         ['name', 'administration-date', 'manufacturer', 'lot', 'expiration-date', 'sequence',
                          'consent'])
        self._round_trip(immunization)
        self.assertEqual(str(immunization), 'MMR')
        self.assertRaises(ValueError, setattr, immunization, 'lot', ' ')
        self.assertRaises(ThingSerializationError, Immunization().to_xml)
