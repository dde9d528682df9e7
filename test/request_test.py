#!/usr/bin/env python
from copy import deepcopy
from unittest import TestCase

from awssigner import Headers, MalformedRequestError, SignableRequest


class HeadersTest(TestCase):
    def test_case_insensitive(self):
        headers = Headers({"Content-Type": "text/plain"})
        self.assertEqual(headers["content-type"], "text/plain")
        self.assertIn("CONTENT-TYPE", headers)
        self.assertEqual(headers.get("x-amz-date"), None)

    def test_first_spelling_kept(self):
        headers = Headers()
        headers["X-Amz-Date"] = "a"
        headers["x-amz-date"] = "b"
        self.assertEqual(list(headers), ["X-Amz-Date"])
        self.assertEqual(headers["X-AMZ-DATE"], "b")
        self.assertEqual(len(headers), 1)

    def test_order(self):
        headers = Headers([("b", "1"), ("A", "2"), ("c", "3")])
        self.assertEqual(list(headers), ["b", "A", "c"])
        self.assertEqual(list(headers.lower_items()),
                         [("b", "1"), ("a", "2"), ("c", "3")])

    def test_delete(self):
        headers = Headers(Host="example.com")
        del headers["HOST"]
        self.assertEqual(len(headers), 0)

    def test_equality(self):
        self.assertEqual(Headers({"Host": "x"}), {"host": "x"})
        self.assertNotEqual(Headers({"Host": "x"}), Headers({"Host": "y"}))
        self.assertNotEqual(Headers({"a": "1"}), {"a": 1})
        self.assertFalse(Headers({"a": "1"}) == {"a": 1})

    def test_copy(self):
        headers = Headers({"Host": "x"})
        copy = headers.copy()
        copy["Host"] = "y"
        self.assertEqual(headers["host"], "x")

    def test_bad_types(self):
        headers = Headers()
        with self.assertRaises(TypeError):
            headers[1] = "x"
        with self.assertRaises(TypeError):
            headers["Host"] = ["x"]


class SignableRequestTest(TestCase):
    def test_defaults(self):
        request = SignableRequest()
        self.assertEqual(request.method, "GET")
        self.assertIsNone(request.host)
        self.assertEqual(request.path, "/")
        self.assertEqual(request.query, "")
        self.assertEqual(len(request.headers), 0)
        self.assertIsNone(request.body)

    def test_from_url(self):
        request = SignableRequest.from_url(
            "https://iam.amazonaws.com/a%20b/c?Version=2010-05-08&Action=x",
            method="POST", headers={"Content-Type": "text/plain"},
            body=b"data")
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.host, "iam.amazonaws.com")
        self.assertEqual(request.path, "/a b/c")
        self.assertEqual(request.query, "Version=2010-05-08&Action=x")
        self.assertEqual(request.headers["content-type"], "text/plain")
        self.assertEqual(request.body, b"data")

    def test_from_url_ports(self):
        self.assertEqual(
            SignableRequest.from_url("https://example.com:443/").host,
            "example.com")
        self.assertEqual(
            SignableRequest.from_url("http://example.com:80/").host,
            "example.com")
        self.assertEqual(
            SignableRequest.from_url("http://example.com:8080/").host,
            "example.com:8080")
        self.assertEqual(
            SignableRequest.from_url("https://user:pw@example.com/").host,
            "example.com")

    def test_from_url_bad_port(self):
        with self.assertRaises(MalformedRequestError):
            SignableRequest.from_url("https://example.com:abc/")

    def test_from_url_without_host(self):
        request = SignableRequest.from_url("/just/a/path")
        self.assertIsNone(request.host)
        self.assertEqual(request.path, "/just/a/path")

    def test_body_types(self):
        request = SignableRequest(body=bytearray(b"abc"))
        self.assertEqual(request.body, b"abc")
        self.assertIsInstance(request.body, bytes)

        with self.assertRaises(TypeError):
            request.body = "abc"

    def test_bad_types(self):
        with self.assertRaises(TypeError):
            SignableRequest(method=1)
        with self.assertRaises(TypeError):
            SignableRequest(host=b"example.com")
        with self.assertRaises(TypeError):
            SignableRequest(path=["a"])
        with self.assertRaises(TypeError):
            SignableRequest(query={})
        with self.assertRaises(TypeError):
            SignableRequest(headers=[("Host", "x")])

    def test_deepcopy(self):
        request = SignableRequest(host="example.com", headers={"A": "1"})
        copy = deepcopy(request)
        copy.headers["B"] = "2"
        self.assertNotIn("B", request.headers)
        self.assertEqual(copy.host, "example.com")
