import io
import json

import pytest

from typedump.emit import render_document, write_document
from typedump.model import (
	ClassDescriptor,
	EnumDescriptor,
	EnumMember,
	FieldDescriptor,
	Method,
	Parameter,
	SchemaDocument,
)


def _document():
	return SchemaDocument(
		classes=[
			ClassDescriptor(
				name="Widget",
				namespace=["Acme"],
				fields=[FieldDescriptor(name="size", type="System.Int32")],
				methods=[
					Method(
						name="Resize",
						return_type="System.Void",
						parameters=[Parameter(name="by", type="System.Int32")],
						is_static=False,
					)
				],
			)
		],
		enums=[
			EnumDescriptor(
				name="Mode",
				namespace=["Acme"],
				backing_type="System.Byte",
				members=[EnumMember(name="On", value=1)],
			)
		],
	)


def test_compact_output_uses_camel_case():
	text = render_document(_document())
	assert "\n" not in text
	assert " " not in text
	data = json.loads(text)
	widget = data["classes"][0]
	assert list(widget) == [
		"name",
		"internalName",
		"namespace",
		"staticFields",
		"fields",
		"constructors",
		"methods",
	]
	assert widget["internalName"] is None
	assert widget["staticFields"] is None
	assert widget["methods"][0]["returnType"] == "System.Void"
	assert widget["methods"][0]["isStatic"] is False
	assert data["enums"][0]["backingType"] == "System.Byte"


def test_pretty_output_is_indented():
	stream = io.StringIO()
	write_document(_document(), stream, pretty=True)
	text = stream.getvalue()
	assert text.startswith('{\n  "classes": [')
	assert json.loads(text) == json.loads(render_document(_document()))


def test_write_failure_propagates():
	stream = io.StringIO()
	stream.close()
	with pytest.raises(ValueError):
		write_document(_document(), stream)
