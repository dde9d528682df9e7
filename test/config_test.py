#!/usr/bin/env python
from unittest import TestCase

from awssigner import ConfigurationError, Credentials, Service, Signer
from awssigner.config import resolve_credentials, resolve_region

environ = {
    "AWS_ACCESS_KEY_ID": "AKIDEXAMPLE",
    "AWS_SECRET_ACCESS_KEY": "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
    "AWS_REGION": "us-east-1",
}


class ConfigTest(TestCase):
    def test_resolve(self):
        self.assertEqual(
            resolve_credentials(environ),
            Credentials("AKIDEXAMPLE",
                        "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"))
        self.assertEqual(resolve_region(environ), "us-east-1")

    def test_fallback_names(self):
        env = {
            "AWS_ACCESSKEYID": "AKID",
            "AWS_SECRETACCESSKEY": "secret",
            "AWS_DEFAULT_REGION": "eu-west-1",
        }
        self.assertEqual(resolve_credentials(env),
                         Credentials("AKID", "secret"))
        self.assertEqual(resolve_region(env), "eu-west-1")

    def test_preferred_name_wins(self):
        env = dict(environ, AWS_DEFAULT_REGION="eu-west-1")
        self.assertEqual(resolve_region(env), "us-east-1")

    def test_missing_credentials(self):
        for name in ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"):
            env = dict(environ)
            del env[name]
            with self.assertRaises(ConfigurationError):
                resolve_credentials(env)
            self.assertEqual(resolve_region(env), "us-east-1")

    def test_missing_region(self):
        env = dict(environ)
        del env["AWS_REGION"]
        with self.assertRaises(ConfigurationError):
            resolve_region(env)
        self.assertEqual(resolve_credentials(env).access_key_id, "AKIDEXAMPLE")

    def test_empty_value(self):
        env = dict(environ, AWS_SECRET_ACCESS_KEY="")
        with self.assertRaises(ConfigurationError) as cm:
            resolve_credentials(env)
        self.assertIn("AWS_SECRET_ACCESS_KEY", str(cm.exception))

    def test_signer_from_environment(self):
        signer = Signer.from_environment(Service.IAM, environ=environ)
        self.assertEqual(signer.region, "us-east-1")
        self.assertIs(signer.service, Service.IAM)
        self.assertEqual(signer.credentials.access_key_id, "AKIDEXAMPLE")
