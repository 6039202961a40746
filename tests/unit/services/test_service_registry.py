"""
Tests for the ServiceRegistry dependency injection container
"""

import pytest
from unittest.mock import Mock

from services.registry import ServiceRegistry


class TestServiceRegistry:
    """Test service registration and resolution"""

    @pytest.fixture
    def registry(self):
        return ServiceRegistry()

    def test_register_instance(self, registry):
        """Test registering a ready-made instance"""
        session = Mock()
        registry.register('db_session', session)

        assert registry.get('db_session') is session

    def test_factory_is_lazy(self, registry):
        """Test factories are not called until first lookup"""
        factory = Mock(return_value='mapper')
        registry.register_factory('column_mapper', factory)

        factory.assert_not_called()
        assert registry.get('column_mapper') == 'mapper'
        factory.assert_called_once_with()

    def test_dependencies_are_passed_as_keywords(self, registry):
        """Test declared dependencies are resolved and injected"""
        registry.register('db_session', 'session')
        factory = Mock(return_value='repo')
        registry.register_factory('user_repository', factory, dependencies=['db_session'])

        registry.get('user_repository')

        factory.assert_called_once_with(db_session='session')

    def test_singleton_is_cached(self, registry):
        """Test singleton factories run once"""
        registry.register_factory('import_executor', lambda: object())

        assert registry.get('import_executor') is registry.get('import_executor')

    def test_unknown_service_raises(self, registry):
        """Test looking up an unregistered service"""
        with pytest.raises(ValueError, match="not registered"):
            registry.get('missing')

    def test_circular_dependency_detected(self, registry):
        """Test cycles raise instead of recursing forever"""
        registry.register_factory('a', lambda b: 'a', dependencies=['b'])
        registry.register_factory('b', lambda a: 'b', dependencies=['a'])

        with pytest.raises(RuntimeError, match="Circular dependency detected: a -> b -> a"):
            registry.get('a')

    def test_reset_drops_cached_instances(self, registry):
        """Test reset forces factories to run again"""
        factory = Mock(side_effect=[object(), object()])
        registry.register_factory('migration', factory)

        first = registry.get('migration')
        registry.reset()
        second = registry.get('migration')

        assert first is not second
        assert factory.call_count == 2

    def test_validate_dependencies(self, registry):
        """Test unregistered dependencies are reported"""
        registry.register_factory('membership_repository', lambda db_session: None, dependencies=['db_session'])

        errors = registry.validate_dependencies()

        assert errors == ["Service 'membership_repository' depends on unregistered service 'db_session'"]
