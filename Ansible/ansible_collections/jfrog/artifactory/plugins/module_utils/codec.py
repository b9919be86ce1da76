# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
Conversion between wire payloads and ResourceData.

A payload is a dataclass whose attribute names are the schema field names and
whose json_field metadata carries the name Artifactory uses on the wire.
'''

from dataclasses import field, fields, is_dataclass


def json_field(name, omitempty=False, **kwargs):
    '''Declares a payload attribute serialised as "name".  With omitempty, an empty value is left out of the body.'''
    return field(metadata={'json': name, 'omitempty': omitempty}, **kwargs)


def _is_empty(value):
    return value is None or value == '' or value == [] or value is False or value == 0


def to_payload_json(payload):
    '''Returns the JSON-ready dictionary for a payload.'''
    body = dict()
    for f in fields(payload):
        value = getattr(payload, f.name)
        if f.metadata.get('omitempty') and _is_empty(value):
            continue
        if is_dataclass(value):
            value = to_payload_json(value)
        elif isinstance(value, (set, frozenset)):
            value = sorted(value)
        body[f.metadata.get('json', f.name)] = value
    return body


def decode_into(payload, data):
    '''Copies the values of a decoded JSON object onto the payload.  Unknown and null members are ignored.'''
    for f in fields(payload):
        name = f.metadata.get('json', f.name)
        if name not in data or data[name] is None:
            continue
        current = getattr(payload, f.name)
        if is_dataclass(current) and isinstance(data[name], dict):
            decode_into(current, data[name])
        else:
            setattr(payload, f.name, data[name])
    return payload


def schema_has_key(schema):
    def predicate(name):
        return name in schema
    return predicate


def universal_packer(predicate):
    '''Returns a packer that copies every payload attribute accepted by predicate into the ResourceData.'''
    def pack(payload, d):
        for f in fields(payload):
            if not predicate(f.name):
                continue
            value = getattr(payload, f.name)
            if value is None:
                value = d.schema[f.name].zero_value() if f.name in d.schema else None
            d.set(f.name, value)
    return pack


def default_packer(schema):
    return universal_packer(schema_has_key(schema))
