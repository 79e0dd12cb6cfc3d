"""Unit tests for normalizing the OpenCalais JSON response graph."""

from __future__ import annotations

import json
import unittest

from opencalais.annotation.client import AnnotationClient
from opencalais.annotation.errors import ApiError, ParseError
from opencalais.annotation.types import EntityInstance, HttpResponse


class _StubHttpClient:
    def __init__(self, *bodies: str) -> None:
        self.bodies = list(bodies)
        self.calls: list[dict[str, str]] = []

    def post(self, url, headers, body):  # noqa: ANN001
        _ = url, body
        self.calls.append(headers)
        payload = self.bodies.pop(0) if len(self.bodies) > 1 else self.bodies[0]
        return HttpResponse(status=200, body=payload)


class _SequenceHttpClient:
    def __init__(self, *responses: HttpResponse) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, str]] = []

    def post(self, url, headers, body):  # noqa: ANN001
        _ = url, body
        self.calls.append(headers)
        return self.responses.pop(0)


_RESPONSE = {
    "doc": {
        "info": {"docId": "http://d.opencalais.com/dochash-1/abc", "docTitle": ""},
        "meta": {"language": "English"},
    },
    "http://d.opencalais.com/dochash-1/abc/cat/1": {
        "_typeGroup": "topics",
        "forenduserdisplay": "false",
        "score": 0.956,
        "name": "Politics",
    },
    "http://d.opencalais.com/genericHasher-1/person-macron": {
        "_typeGroup": "entities",
        "_type": "Person",
        "forenduserdisplay": "false",
        "name": "Emmanuel Macron",
        "commonname": "Macron",
        "persontype": "political",
        "relevance": 0.8,
        "confidence": {"statisticalfeature": "0.96", "aggregate": "0.9"},
        "instances": [
            {
                "detection": "[President ]Emmanuel Macron[, one of]",
                "prefix": "President ",
                "exact": "Emmanuel Macron",
                "suffix": ", one of",
                "offset": 201,
                "length": 15,
            },
            {
                "detection": "[visit, ]Macron[ tries]",
                "prefix": "visit, ",
                "exact": "Macron",
                "suffix": " tries",
                "offset": 480,
                "length": 6,
            },
        ],
    },
    "http://d.opencalais.com/dochash-1/abc/Relations/1": {
        "_typeGroup": "relations",
        "_type": "PersonTravel",
        "person": "http://d.opencalais.com/genericHasher-1/person-macron",
    },
    "http://d.opencalais.com/dochash-1/abc/lid/DefaultLangId": {
        "_typeReference": "http://s.opencalais.com/1/type/lid/DefaultLangId",
        "_type": "DefaultLangId",
        "language": "http://d.opencalais.com/lid/DefaultLangId/English",
    },
}


def _client(*bodies: str) -> tuple[AnnotationClient, _StubHttpClient]:
    transport = _StubHttpClient(*bodies)
    return AnnotationClient("token", http_client=transport), transport


class ExtractDataTests(unittest.TestCase):
    def test_routes_members_by_type_group(self) -> None:
        client, _ = _client(json.dumps(_RESPONSE))

        client.extract_data("Emmanuel Macron visits Washington.")

        topics = client.get_topics()
        entities = client.get_entities()
        self.assertEqual(list(topics), ["Politics"])
        self.assertEqual(topics["Politics"].id, "http://d.opencalais.com/dochash-1/abc/cat/1")
        self.assertEqual(topics["Politics"].score, 0.956)
        self.assertEqual(list(entities), ["Person"])
        self.assertEqual(list(entities["Person"]), ["Emmanuel Macron"])
        self.assertEqual(client.get_social_tags(), {})

    def test_entity_fields_and_instances_in_order(self) -> None:
        client, _ = _client(json.dumps(_RESPONSE))

        entity = client.get_entities("Emmanuel Macron visits Washington.")["Person"]["Emmanuel Macron"]

        self.assertEqual(entity.id, "http://d.opencalais.com/genericHasher-1/person-macron")
        self.assertEqual(entity.common_name, "Macron")
        self.assertEqual(entity.relevance, 0.8)
        self.assertEqual(entity.confidence, {"statisticalfeature": 0.96, "aggregate": 0.9})
        self.assertEqual(len(entity.instances), 2)
        self.assertEqual(
            entity.instances[0],
            EntityInstance(
                detection="[President ]Emmanuel Macron[, one of]",
                exact="Emmanuel Macron",
                offset=201,
                prefix="President ",
                suffix=", one of",
            ),
        )
        self.assertEqual(entity.instances[1].exact, "Macron")

    def test_entity_defaults_when_optional_fields_missing(self) -> None:
        body = {
            "e1": {"_typeGroup": "entities", "_type": "Company", "name": "Apple", "relevance": 0.2},
        }
        client, _ = _client(json.dumps(body))

        entity = client.get_entities("Apple")["Company"]["Apple"]

        self.assertEqual(entity.common_name, "")
        self.assertEqual(entity.instances, [])
        self.assertIsNone(entity.confidence)

    def test_social_tags_are_collected(self) -> None:
        body = {
            "tag/1": {
                "_typeGroup": "socialTag",
                "id": "http://d.opencalais.com/dochash-1/abc/SocialTag/1",
                "socialTag": "http://d.opencalais.com/genericHasher-1/xyz",
                "name": "Diplomacy",
                "importance": "1",
                "originalValue": "Diplomacy",
            },
        }
        client, _ = _client(json.dumps(body))

        tags = client.get_social_tags("Macron and Trump talk trade.")

        self.assertEqual(tags["Diplomacy"].id, "tag/1")
        self.assertEqual(tags["Diplomacy"].importance, 1.0)
        self.assertEqual(tags["Diplomacy"].original_value, "Diplomacy")

    def test_new_parse_replaces_previous_collections(self) -> None:
        second = {"t2": {"_typeGroup": "topics", "name": "Business", "score": 0.5}}
        client, _ = _client(json.dumps(_RESPONSE), json.dumps(second))

        client.extract_data("first document")
        client.extract_data("second document")

        self.assertEqual(list(client.get_topics()), ["Business"])
        self.assertEqual(client.get_entities(), {})

    def test_non_object_response_raises_parse_error(self) -> None:
        for body in ('["a", "b"]', "42", "not json"):
            with self.subTest(body=body):
                client, _ = _client(body)
                with self.assertRaises(ParseError):
                    client.extract_data("text")

    def test_parse_failure_keeps_previous_collections(self) -> None:
        client, _ = _client(json.dumps(_RESPONSE), "[]")

        client.extract_data("first document")
        with self.assertRaises(ParseError):
            client.extract_data("second document")

        self.assertEqual(list(client.get_topics()), ["Politics"])

    def test_malformed_routed_member_raises_parse_error(self) -> None:
        body = {"t1": {"_typeGroup": "topics", "name": "Politics", "score": "high"}}
        client, _ = _client(json.dumps(body))

        with self.assertRaises(ParseError):
            client.extract_data("text")

    def test_output_format_is_reset_to_json_with_refresh(self) -> None:
        transport = _StubHttpClient(json.dumps(_RESPONSE))
        client = AnnotationClient("token", output_format="text/n3", http_client=transport)
        client.query("same text")

        with self.assertLogs("opencalais.annotation.client", level="WARNING"):
            client.extract_data("same text")

        self.assertEqual(len(transport.calls), 2)
        self.assertEqual(transport.calls[1]["outputFormat"], "application/json")
        self.assertEqual(client.config.output_format, "application/json")
        self.assertEqual([w.code for w in client.warnings], ["output_format_reset"])

    def test_failed_format_reset_does_not_reuse_old_format_body(self) -> None:
        transport = _SequenceHttpClient(
            HttpResponse(status=200, body="@prefix c: <http://s.opencalais.com/1/pred/> ."),
            HttpResponse(status=503, body='{"fault": {"faultstring": "service unavailable"}}'),
            HttpResponse(status=200, body=json.dumps(_RESPONSE)),
        )
        client = AnnotationClient("token", output_format="text/n3", http_client=transport)
        client.query("same text")

        with self.assertLogs("opencalais.annotation.client", level="WARNING"):
            with self.assertRaises(ApiError):
                client.extract_data("same text")
        client.extract_data("same text")

        self.assertEqual(len(transport.calls), 3)
        self.assertEqual(transport.calls[2]["outputFormat"], "application/json")
        self.assertIn("Politics", client.get_topics())

    def test_json_format_obeys_cache(self) -> None:
        client, transport = _client(json.dumps(_RESPONSE))

        client.get_entities("same text")
        client.get_topics("same text")

        self.assertEqual(len(transport.calls), 1)
        self.assertEqual(client.warnings, ())


class AccessorTests(unittest.TestCase):
    def test_accessors_are_empty_before_extraction(self) -> None:
        client, transport = _client(json.dumps(_RESPONSE))

        self.assertEqual(client.get_topics(), {})
        self.assertEqual(client.get_social_tags(), {})
        self.assertEqual(client.get_entities(), {})
        self.assertEqual(transport.calls, [])

    def test_later_accessors_reuse_first_extraction(self) -> None:
        client, transport = _client(json.dumps(_RESPONSE))

        client.get_entities("Emmanuel Macron visits Washington.")
        topics = client.get_topics()

        self.assertIn("Politics", topics)
        self.assertEqual(len(transport.calls), 1)
        self.assertEqual(client.get_last_api_response(), json.dumps(_RESPONSE))

    def test_returned_collections_are_copies(self) -> None:
        client, _ = _client(json.dumps(_RESPONSE))
        client.extract_data("text")

        client.get_topics().clear()

        self.assertIn("Politics", client.get_topics())

    def test_mutating_returned_entities_leaves_client_state(self) -> None:
        client, _ = _client(json.dumps(_RESPONSE))
        client.extract_data("text")

        entity = client.get_entities()["Person"]["Emmanuel Macron"]
        entity.instances.clear()
        client.get_topics()["Politics"].score = 0.0

        self.assertEqual(len(client.get_entities()["Person"]["Emmanuel Macron"].instances), 2)
        self.assertEqual(client.get_topics()["Politics"].score, 0.956)


if __name__ == "__main__":
    unittest.main()
