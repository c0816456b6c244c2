import unittest

from lxml import etree as etree_

from hvtypes.exceptions import ThingSerializationError, XmlParseError
from hvtypes.item_types.codable import CodableValue, CodedValue
from hvtypes.item_types.vocabulary import VocabularyItem, VocabularyKey


class TestCodedValue(unittest.TestCase):

    def test_round_trip(self):
        coded = CodedValue('12345', 'icd9')
        node = coded.write_xml('code')
        self.assertEqual([child.tag for child in node], ['value', 'type'])
        coded2 = CodedValue.from_node(node)
        self.assertEqual(coded, coded2)
        self.assertEqual(coded2.value, '12345')
        self.assertEqual(coded2.vocabulary_name, 'icd9')
        self.assertIsNone(coded2.family)
        self.assertIsNone(coded2.version)

    def test_element_order(self):
        coded = CodedValue('12345', 'icd9', family='wc', version='1')
        node = coded.write_xml('code')
        self.assertEqual([child.tag for child in node], ['value', 'family', 'type', 'version'])
        self.assertEqual(CodedValue.from_node(node), coded)

    def test_mandatory_fields(self):
        self.assertRaises(ThingSerializationError, CodedValue().write_xml, 'code')
        self.assertRaises(ThingSerializationError, CodedValue(value='1').write_xml, 'code')
        self.assertRaises(ThingSerializationError, CodedValue(vocabulary_name='icd9').write_xml, 'code')

    def test_setter_validation(self):
        coded = CodedValue('1', 'icd9')
        for bad_value in ('', '   ', None):
            self.assertRaises(ValueError, setattr, coded, 'value', bad_value)
            self.assertRaises(ValueError, setattr, coded, 'vocabulary_name', bad_value)
        self.assertRaises(ValueError, setattr, coded, 'family', '  ')
        self.assertRaises(ValueError, setattr, coded, 'version', '\t')
        coded.family = None
        coded.version = ''
        self.assertEqual(coded.value, '1')

    def test_empty_optional_strings_not_written(self):
        coded = CodedValue('1', 'icd9', family='', version='')
        node = coded.write_xml('code')
        self.assertEqual([child.tag for child in node], ['value', 'type'])

    def test_parse_missing_value(self):
        node = etree_.fromstring('<code><type>icd9</type></code>')
        self.assertRaises(XmlParseError, CodedValue.from_node, node)

    def test_str(self):
        self.assertEqual(str(CodedValue('1', 'icd9', family='wc', version='2')), 'wc, icd9, 2, 1')


class TestCodableValue(unittest.TestCase):

    def test_round_trip(self):
        codable = CodableValue('Aspirin', CodedValue('1191', 'RxNorm', family='RxNorm'))
        codable.append(CodedValue('A01', 'atc'))
        node = codable.write_xml('name')
        self.assertEqual([child.tag for child in node], ['text', 'code', 'code'])
        codable2 = CodableValue.from_node(node)
        self.assertEqual(codable, codable2)
        self.assertEqual(len(codable2), 2)
        self.assertEqual(codable2[1].value, 'A01')

    def test_text_only(self):
        codable = CodableValue('free text')
        node = codable.write_xml('name')
        self.assertEqual([child.tag for child in node], ['text'])
        self.assertFalse(codable.is_empty())
        self.assertEqual(str(codable), 'free text')

    def test_parse(self):
        xml = b"""<name>
                    <text>Hypertension</text>
                    <code><value>401.9</value><family>wc</family><type>icd9</type><version>2</version></code>
                  </name>"""
        codable = CodableValue.from_node(etree_.fromstring(xml))
        self.assertEqual(codable.text, 'Hypertension')
        self.assertEqual(codable[0].family, 'wc')
        self.assertEqual(codable[0].version, '2')

    def test_sequence_behavior(self):
        code1 = CodedValue('1', 'a')
        code2 = CodedValue('2', 'a')
        codable = CodableValue()
        self.assertTrue(codable.is_empty())
        self.assertEqual(str(codable), '')
        codable.append(code1)
        codable.insert(0, code2)
        self.assertEqual(list(codable), [code2, code1])
        self.assertIn(code1, codable)
        codable.remove(code2)
        self.assertEqual(len(codable), 1)
        codable.text = 'x'
        codable.clear()
        self.assertTrue(codable.is_empty())
        self.assertIsNone(codable.text)

    def test_text_validation(self):
        codable = CodableValue()
        self.assertRaises(ValueError, setattr, codable, 'text', '')
        self.assertRaises(ValueError, setattr, codable, 'text', '  ')
        codable.text = None

    def test_vocabulary(self):
        key = VocabularyKey('icd9', family='wc', version='2')
        codable = CodableValue.from_vocabulary_key('Hypertension', '401.9', key)
        self.assertEqual(codable[0].vocabulary_name, 'icd9')
        self.assertEqual(codable[0].family, 'wc')
        self.assertEqual(codable[0].version, '2')

        item = VocabularyItem('mg', 'medication-dose-units', family='wc', display_text='milligram')
        codable = CodableValue.from_vocabulary_item(item)
        self.assertEqual(codable.text, 'milligram')
        self.assertEqual(codable[0].value, 'mg')

        codable = CodableValue('my text')
        codable.add_vocabulary_item(item)
        self.assertEqual(codable.text, 'my text')
        self.assertEqual(len(codable), 1)

        self.assertRaises(ValueError, VocabularyKey, ' ')
